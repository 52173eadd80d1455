from .finance import FinanceService
from .ledger import LedgerService
from .project import ProjectService

__all__ = [
    "FinanceService",
    "LedgerService",
    "ProjectService",
]
