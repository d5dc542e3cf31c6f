"""Runtime configuration loaded from the environment / ``.env``."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from decor_admin.domain.model.stock import UnresolvedItemPolicy
from decor_admin.domain.model.value_objects import DEFAULT_CURRENCY, Money

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    """Settings for the admin back office.

    Every field can be overridden with a ``DECOR_ADMIN_``-prefixed
    environment variable, e.g. ``DECOR_ADMIN_DATA_DIR``.
    """

    model_config = SettingsConfigDict(
        env_prefix="DECOR_ADMIN_",
        env_file=".env",
        extra="ignore",
    )

    data_dir: Path = Field(default=_DEFAULT_DATA_DIR)
    currency: str = Field(default=DEFAULT_CURRENCY)
    delivery_fee: Decimal = Field(default=Decimal("200"), ge=0)
    on_unresolved_item: UnresolvedItemPolicy = Field(default=UnresolvedItemPolicy.SKIP)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def delivery_fee_money(self) -> Money:
        return Money(self.delivery_fee, self.currency)


@lru_cache
def get_settings() -> Settings:
    return Settings()
