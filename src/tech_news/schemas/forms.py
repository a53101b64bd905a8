"""Pydantic schemas for submitted HTML forms and JSON bodies.

Every field accepts any input; values that are not strings become ``""`` so
validation rules can report a missing value instead of a type error.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


def _coerce_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


class CredentialsForm(BaseModel):
    """Username and password as submitted to the register and login forms."""

    username: str = ""
    password: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("username", "password", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Replace non-string input with an empty string."""
        return _coerce_text(v)


class PostForm(BaseModel):
    """Title and content as submitted to the composer and editor forms."""

    title: str = ""
    content: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", "content", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Replace non-string input with an empty string."""
        return _coerce_text(v)
