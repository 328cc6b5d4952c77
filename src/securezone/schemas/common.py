"""Shared validators and small response payloads."""

from pydantic import BaseModel


def strip_required(value: str) -> str:
    """Strip surrounding whitespace and reject strings that end up empty."""
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by moderation and admin actions."""

    message: str
