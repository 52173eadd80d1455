from .service import LedgerService

__all__ = ["LedgerService"]
