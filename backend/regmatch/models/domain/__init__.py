"""Domain models for the application."""

from regmatch.models.domain.rule import Rule

__all__ = ["Rule"]
