from .finance_view_store import FinanceViewSettingsStore

__all__ = ["FinanceViewSettingsStore"]
