from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.domain.identifiers import generate_id


@dataclass
class Project:
    """Ledger-side view of a Backlog Pro project: only what reports need."""

    id: str
    name: str
    description: str = ""
    client_name: Optional[str] = None
    budget: Optional[float] = None

    @staticmethod
    def create(name: str, description: str = "", **extra) -> "Project":
        return Project(
            id=generate_id(),
            name=name,
            description=description,
            **extra,
        )


__all__ = ["Project"]
