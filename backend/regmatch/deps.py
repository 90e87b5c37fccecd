"""Dependency injection for FastAPI endpoints."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from regmatch.db.session import get_db

# Request-scoped session: committed on success, rolled back on error
DbSession = Annotated[AsyncSession, Depends(get_db)]

__all__ = ["DbSession", "get_db"]
