"""
Formatting and Configuration Tests

Validates:
1. pt-BR display helpers (currency, dates, phone masks, truncation)
2. Opaque id generation
3. BACKOFFICE_* settings parsing
"""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.config import Settings
from core.formatting import (
    NBSP,
    format_currency,
    format_date,
    format_datetime,
    format_phone,
    generate_id,
    truncate_text,
)


class TestFormatCurrency:
    """Test BRL currency formatting."""

    @pytest.mark.parametrize("value, expected", [
        (Decimal("1299.99"), "R$ 1.299,99"),
        (Decimal("0"), "R$ 0,00"),
        (Decimal("3959.97"), "R$ 3.959,97"),
        (1234567.5, "R$ 1.234.567,50"),
        ("10.005", "R$ 10,01"),
        (Decimal("-42.1"), "-R$ 42,10"),
    ])
    def test_format_currency(self, value, expected):
        assert format_currency(value) == expected.replace(" ", NBSP)

    def test_uses_no_break_space(self):
        assert format_currency(1)[2] == "\u00a0"


class TestFormatDates:
    """Test pt-BR date formatting."""

    def test_format_date_from_iso_string(self):
        assert format_date("2023-01-15T10:30:00Z") == "15 de jan. de 2023"

    def test_format_date_from_date(self):
        assert format_date(date(2023, 12, 1)) == "1 de dez. de 2023"

    def test_format_datetime(self):
        value = datetime(2023, 2, 5, 11, 15, tzinfo=timezone.utc)
        assert format_datetime(value) == "5 de fev. de 2023, 11:15"

    def test_format_datetime_pads_minutes(self):
        assert format_datetime("2023-05-09T08:05:00") == "9 de mai. de 2023, 08:05"


class TestTextHelpers:
    """Test phone masking, truncation and id generation."""

    def test_format_phone_masks_ten_digits(self):
        assert format_phone("5551234567") == "(555) 123-4567"

    def test_format_phone_leaves_other_input(self):
        assert format_phone("(555) 123-4567") == "(555) 123-4567"
        assert format_phone("12345") == "12345"

    def test_truncate_short_text_unchanged(self):
        assert truncate_text("Laptop Pro") == "Laptop Pro"
        assert truncate_text("x" * 50) == "x" * 50

    def test_truncate_long_text(self):
        assert truncate_text("x" * 51) == "x" * 50 + "..."
        assert truncate_text("Wireless Earbuds", 8) == "Wireless..."

    def test_generate_id(self):
        ids = {generate_id() for _ in range(500)}

        assert len(ids) == 500
        assert all(i.isalnum() and i == i.lower() for i in ids)


class TestSettings:
    """Test BACKOFFICE_* settings."""

    def test_defaults(self, monkeypatch):
        for name in ("BACKOFFICE_LATENCY_MS", "BACKOFFICE_LOW_STOCK_THRESHOLD",
                     "BACKOFFICE_RECENT_SALES_LIMIT", "BACKOFFICE_SEED_SAMPLE_DATA",
                     "BACKOFFICE_LOG_LEVEL", "BACKOFFICE_LOG_JSON"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings.from_env()

        assert settings == Settings()
        assert settings.latency_seconds == 0.5
        assert settings.log_level_number == logging.INFO

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("BACKOFFICE_LATENCY_MS", "0")
        monkeypatch.setenv("BACKOFFICE_LOW_STOCK_THRESHOLD", "12")
        monkeypatch.setenv("BACKOFFICE_SEED_SAMPLE_DATA", "no")
        monkeypatch.setenv("BACKOFFICE_LOG_LEVEL", "debug")
        monkeypatch.setenv("BACKOFFICE_LOG_JSON", "TRUE")

        settings = Settings.from_env()

        assert settings.latency_ms == 0
        assert settings.low_stock_threshold == 12
        assert settings.seed_sample_data is False
        assert settings.log_level_number == logging.DEBUG
        assert settings.log_json is True

    @pytest.mark.parametrize("name, value", [
        ("BACKOFFICE_LATENCY_MS", "fast"),
        ("BACKOFFICE_LATENCY_MS", "-5"),
        ("BACKOFFICE_RECENT_SALES_LIMIT", "1.5"),
        ("BACKOFFICE_SEED_SAMPLE_DATA", "maybe"),
        ("BACKOFFICE_LOG_LEVEL", "LOUD"),
    ])
    def test_invalid_values_rejected(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ValueError):
            Settings.from_env()


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
