from pathlib import Path

import pytest
from pydantic import ValidationError

from salonbook.config import AppConfig, EmailAdapter, StoreAdapter


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Keep a developer's .env out of these tests.
    monkeypatch.chdir(tmp_path)
    for name in ("BUSINESS_TIMEZONE", "MAX_ADVANCE_DAYS", "STORE_ADAPTER", "EMAIL_ADAPTER"):
        monkeypatch.delenv(name, raising=False)


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()

        assert config.business_timezone == "America/Chicago"
        assert config.max_advance_days == 30
        assert config.store.adapter is StoreAdapter.SQL
        assert config.email.adapter is EmailAdapter.DISABLED

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BUSINESS_TIMEZONE", "America/Denver")
        monkeypatch.setenv("STORE_ADAPTER", "memory")
        monkeypatch.setenv("EMAIL_ADAPTER", "resend")
        monkeypatch.setenv("EMAIL_ADMIN_ADDRESS", "admin@salon.test")

        config = AppConfig()

        assert config.business_timezone == "America/Denver"
        assert config.store.adapter is StoreAdapter.MEMORY
        assert config.email.adapter is EmailAdapter.RESEND
        assert config.email.admin_address == "admin@salon.test"

    def test_rejects_unknown_timezone(self) -> None:
        with pytest.raises(ValidationError, match="Unknown business timezone"):
            AppConfig(business_timezone="Mars/Olympus_Mons")

    def test_rejects_negative_window(self) -> None:
        with pytest.raises(ValidationError):
            AppConfig(max_advance_days=-1)
