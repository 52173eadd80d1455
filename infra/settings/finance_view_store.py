from __future__ import annotations

from PySide6.QtCore import QSettings

from core.interfaces import FinanceViewState, PreferencesStore
from core.models import PeriodType


class FinanceViewSettingsStore(PreferencesStore):
    """Adapter around QSettings for the persisted finance view selection."""

    ORG_NAME = "BacklogPro"
    APP_NAME = "BacklogProFinance"

    _KEY_PERIOD_TYPE = "finance/period_type"
    _KEY_MONTHS_BACK = "finance/months_back"
    _KEY_SELECTED_YEAR = "finance/selected_year"
    _KEY_SELECTED_QUARTER = "finance/selected_quarter"
    _KEY_PROJECT_ID = "finance/project_id"

    _PERIOD_TYPES = {p.value for p in PeriodType}

    def __init__(self, settings: QSettings | None = None) -> None:
        self._settings = settings or QSettings(self.ORG_NAME, self.APP_NAME)

    def load(self) -> FinanceViewState:
        defaults = FinanceViewState()
        return FinanceViewState(
            period_type=self._load_period_type(defaults.period_type),
            months_back=self._load_months_back(defaults.months_back),
            selected_year=self._load_optional_int(self._KEY_SELECTED_YEAR, lower=1),
            selected_quarter=self._load_optional_int(self._KEY_SELECTED_QUARTER, lower=1, upper=4),
            project_id=self._load_project_id(),
        )

    def save(self, state: FinanceViewState) -> None:
        period_type = (state.period_type or "").strip().lower()
        if period_type not in self._PERIOD_TYPES:
            period_type = PeriodType.MONTHLY.value
        self._settings.setValue(self._KEY_PERIOD_TYPE, period_type)
        self._settings.setValue(self._KEY_MONTHS_BACK, max(1, int(state.months_back)))
        self._set_optional(self._KEY_SELECTED_YEAR, state.selected_year)
        self._set_optional(self._KEY_SELECTED_QUARTER, state.selected_quarter)
        self._set_optional(self._KEY_PROJECT_ID, (state.project_id or "").strip() or None)
        self._settings.sync()

    def clear(self) -> None:
        for key in (
            self._KEY_PERIOD_TYPE,
            self._KEY_MONTHS_BACK,
            self._KEY_SELECTED_YEAR,
            self._KEY_SELECTED_QUARTER,
            self._KEY_PROJECT_ID,
        ):
            self._settings.remove(key)
        self._settings.sync()

    def _load_period_type(self, default: str) -> str:
        raw = str(self._settings.value(self._KEY_PERIOD_TYPE, default)).strip().lower()
        return raw if raw in self._PERIOD_TYPES else default

    def _load_months_back(self, default: int) -> int:
        raw = self._settings.value(self._KEY_MONTHS_BACK, default)
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return default
        return value if value > 0 else default

    def _load_optional_int(self, key: str, *, lower: int, upper: int | None = None) -> int | None:
        raw = self._settings.value(key)
        if raw in (None, ""):
            return None
        try:
            value = int(raw)
        except (TypeError, ValueError):
            return None
        if value < lower or (upper is not None and value > upper):
            return None
        return value

    def _load_project_id(self) -> str | None:
        raw = self._settings.value(self._KEY_PROJECT_ID)
        value = str(raw or "").strip()
        return value or None

    def _set_optional(self, key: str, value) -> None:
        if value is None:
            self._settings.remove(key)
        else:
            self._settings.setValue(key, value)


__all__ = ["FinanceViewSettingsStore"]
