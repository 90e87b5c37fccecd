"""Regulatory rule domain model."""

from typing import Any, Optional

from sqlalchemy import JSON, Enum as SQLEnum, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from regmatch.core.enums import Jurisdiction
from regmatch.db.base import BaseModel


class Rule(BaseModel):
    """
    Regulatory obligation with its applicability definition.

    ``scope`` and ``conditions`` are stored as JSON in the catalog's camelCase
    shape and validated into a RuleDefinition before evaluation.
    """

    __tablename__ = "rules"
    __table_args__ = (
        UniqueConstraint("title", "authority", name="ix_rules_title_authority"),
    )

    # Identification
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    jurisdiction: Mapped[Jurisdiction] = mapped_column(
        SQLEnum(
            Jurisdiction,
            name="jurisdiction",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        index=True,
    )
    authority: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Applicability
    scope: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    conditions: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    # Obligations
    requirements: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    penalties: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    references: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<Rule(id={self.id}, title={self.title!r}, jurisdiction={self.jurisdiction.value})>"
