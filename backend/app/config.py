"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Every setting has a default: the agent starts on a bare machine with no .env

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Hex strings accepted for USB ids (0x0483) since that is how lsusb prints them
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./bills.db"
    database_busy_timeout_seconds: float = 30.0

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """postgresql:// URLs need the asyncpg driver prefix."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Retention
    retention_window_hours: float = 24.0
    retention_sweep_interval_seconds: float = 3600.0

    # Printer
    printer_type: str = "file"
    printer_device: str = "/dev/usb/lp0"
    printer_host: str | None = None
    printer_port: int = 9100
    printer_usb_vendor_id: int | None = None
    printer_usb_product_id: int | None = None
    printer_profile: str | None = None
    printer_probe_timeout_seconds: float = 5.0
    printer_print_timeout_seconds: float = 10.0
    # 0 disables re-probing: availability stays as probed at startup
    printer_probe_interval_seconds: float = 0.0

    @field_validator("printer_usb_vendor_id", "printer_usb_product_id", mode="before")
    @classmethod
    def parse_hex_id(cls, v):
        if isinstance(v, str) and v.strip():
            return int(v.strip(), 0)
        return v or None

    @field_validator("printer_type")
    @classmethod
    def check_printer_type(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in {"file", "usb", "network", "dummy", "none"}:
            raise ValueError(f"unknown printer_type: {v}")
        return v

    # Receipt
    receipt_title: str = "General Billing"
    receipt_currency: str = "₹"

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
