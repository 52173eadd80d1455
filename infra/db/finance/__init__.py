from infra.db.finance.mapper import record_from_orm, record_to_orm
from infra.db.finance.repository import SqlAlchemyFinancialRecordRepository

__all__ = [
    "record_to_orm",
    "record_from_orm",
    "SqlAlchemyFinancialRecordRepository",
]
