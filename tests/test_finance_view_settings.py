from PySide6.QtCore import QSettings

from core.interfaces import FinanceViewState
from infra.settings.finance_view_store import FinanceViewSettingsStore


def _store_with_ini(tmp_path):
    ini_path = tmp_path / "finance_settings.ini"
    settings = QSettings(str(ini_path), QSettings.IniFormat)
    settings.clear()
    settings.sync()
    return FinanceViewSettingsStore(settings), settings


def test_finance_view_store_round_trip(tmp_path):
    store, _settings = _store_with_ini(tmp_path)
    state = FinanceViewState(
        period_type="quarterly",
        months_back=24,
        selected_year=2024,
        selected_quarter=3,
        project_id="project-1",
    )

    store.save(state)

    assert store.load() == state


def test_finance_view_store_defaults_when_empty(tmp_path):
    store, _settings = _store_with_ini(tmp_path)
    assert store.load() == FinanceViewState()


def test_finance_view_store_normalizes_invalid_values(tmp_path):
    store, settings = _store_with_ini(tmp_path)
    settings.setValue("finance/period_type", "WEEKLY")
    settings.setValue("finance/months_back", "-3")
    settings.setValue("finance/selected_year", "soon")
    settings.setValue("finance/selected_quarter", "9")
    settings.setValue("finance/project_id", "   ")
    settings.sync()

    assert store.load() == FinanceViewState()


def test_finance_view_store_clear_forgets_selection(tmp_path):
    store, _settings = _store_with_ini(tmp_path)
    store.save(FinanceViewState(period_type="annual", months_back=36, selected_year=2023))
    store.save(FinanceViewState(period_type="annual", months_back=36))

    assert store.load().selected_year is None

    store.clear()

    assert store.load() == FinanceViewState()
