from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreAdapter(Enum):
    MEMORY = "memory"
    SQL = "sql"


class EmailAdapter(Enum):
    DISABLED = "disabled"
    RESEND = "resend"
    SMTP = "smtp"


class StoreConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STORE_", env_file=".env", extra="ignore")

    adapter: StoreAdapter = StoreAdapter.SQL
    database_url: str = "sqlite+aiosqlite:///./salonbook.db"


class EmailConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EMAIL_", env_file=".env", extra="ignore")

    adapter: EmailAdapter = EmailAdapter.DISABLED
    from_address: str = ""
    admin_address: str = ""

    resend_api_key: str = ""
    resend_api_url: str = "https://api.resend.com/emails"

    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    business_name: str = "Salon Elegance"
    business_timezone: str = "America/Chicago"
    max_advance_days: int = Field(default=30, ge=0)
    store: StoreConfig = Field(default_factory=lambda: StoreConfig())
    email: EmailConfig = Field(default_factory=lambda: EmailConfig())

    @field_validator("business_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown business timezone '{value}'") from exc
        return value
