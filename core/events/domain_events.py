"""Ledger change notifications; finance views re-aggregate when these fire."""
from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.project_changed: Signal[str] = Signal("project_changed")  # project_id
        self.records_changed: Signal[str] = Signal("records_changed")  # project_id


# SINGLE global instance
domain_events = DomainEvents()
