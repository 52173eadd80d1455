from __future__ import annotations

from uuid import uuid4


def generate_id(prefix: str | None = None) -> str:
    token = str(uuid4())
    if prefix:
        return f"{prefix}-{token}"
    return token


__all__ = ["generate_id"]
