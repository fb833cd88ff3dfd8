from __future__ import annotations

import json
from datetime import date

import pytest

from wedding_dashboard import config
from wedding_dashboard.errors import ConfigError
from wedding_dashboard.formatting import format_currency, format_percent, format_thousands


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in config._ENV_OVERRIDES.values():
        monkeypatch.delenv(name, raising=False)


def test_load_settings_defaults_when_file_missing(tmp_path):
    settings = config.load_settings(tmp_path / 'settings.json')
    assert settings == config.DashboardSettings()
    assert settings.categories == config.DEFAULT_CATEGORIES


def test_load_settings_corrupt_file_falls_back(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text('{not json')
    assert config.load_settings(path) == config.DashboardSettings()


def test_load_settings_from_file(tmp_path):
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps({
        'wedding_date': '2026-02-14',
        'categories': ['Venue', 'Food'],
        'utilization_precision': 2,
        'unknown_key': 'ignored',
    }))
    settings = config.load_settings(path)
    assert settings.wedding_date == date(2026, 2, 14)
    assert settings.categories == ('Venue', 'Food')
    assert settings.utilization_precision == 2


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps({'currency_symbol': '$'}))
    monkeypatch.setenv('WEDDING_CURRENCY_SYMBOL', '€')
    monkeypatch.setenv('WEDDING_CATEGORIES', 'Venue, Food,')
    settings = config.load_settings(path)
    assert settings.currency_symbol == '€'
    assert settings.categories == ('Venue', 'Food')


@pytest.mark.parametrize(
    'payload',
    [
        {'wedding_date': 'someday'},
        {'utilization_precision': -1},
        {'target_warning_threshold': 'lots'},
        {'categories': 5},
    ],
)
def test_invalid_settings_raise(tmp_path, payload):
    path = tmp_path / 'settings.json'
    path.write_text(json.dumps(payload))
    with pytest.raises(ConfigError):
        config.load_settings(path)


def test_save_then_load_settings(tmp_path):
    path = tmp_path / 'nested' / 'settings.json'
    original = config.DashboardSettings(wedding_date=date(2027, 5, 1), currency_symbol='$')
    config.save_settings(original, path)
    loaded = config.load_settings(path)
    assert loaded.wedding_date == date(2027, 5, 1)
    assert loaded.currency_symbol == '$'


def test_format_currency():
    assert format_currency(1234.56) == '₹1,235'
    assert format_currency(1234.56, include_sign=False) == '1,235'
    assert format_currency(-500, symbol='$') == '-$500'
    assert format_currency(-0.4) == '₹0'


def test_format_currency_non_finite():
    assert format_currency(float('inf')) == '₹inf'
    assert format_currency(float('-inf')) == '-₹inf'
    assert format_currency(float('nan')) == '₹nan'


def test_format_thousands_and_percent():
    assert format_thousands(350000) == '₹350k'
    assert format_percent(33.333) == '33.3%'
    assert format_percent(120, precision=0) == '120%'
