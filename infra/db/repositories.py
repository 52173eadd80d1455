# infra/db/repositories.py
from infra.db.finance import SqlAlchemyFinancialRecordRepository
from infra.db.project import SqlAlchemyProjectRepository

__all__ = [
    "SqlAlchemyFinancialRecordRepository",
    "SqlAlchemyProjectRepository",
]
