"""
Pydantic schemas for request bodies.

These schemas normalise form-encoded and JSON submissions before validation.
"""

from .forms import CredentialsForm, PostForm

__all__ = [
    "CredentialsForm",
    "PostForm",
]
