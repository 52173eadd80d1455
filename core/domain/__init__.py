from core.domain.enums import CostType, PeriodType, RecordType
from core.domain.finance import FinancialRecord, RecordDate
from core.domain.identifiers import generate_id
from core.domain.project import Project

__all__ = [
    "generate_id",
    "RecordType",
    "CostType",
    "PeriodType",
    "FinancialRecord",
    "RecordDate",
    "Project",
]
