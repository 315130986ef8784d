"""Configuration settings for the fare engine service."""

from decimal import Decimal
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fare_engine.calculator import DEFAULT_TIMEZONE
from fare_engine.models import DEFAULT_ADDON_PRICES
from fare_engine.money import Price


class PricingSettings(BaseSettings):
    """Add-on prices and the locale rental windows are priced in."""

    helmet_price: Price = DEFAULT_ADDON_PRICES["helmet"]
    insurance_price: Price = DEFAULT_ADDON_PRICES["insurance"]
    extra_addons: dict[str, Price] = Field(
        default_factory=dict,
        description='Additional add-on prices as JSON, e.g. {"phone_mount": 30}',
    )
    timezone: str = Field(
        default=DEFAULT_TIMEZONE,
        description="IANA zone that pickup and drop-off clock times are read in",
    )
    currency: str = "INR"
    fee_on_discounted_subtotal: bool = Field(
        default=False,
        description="Charge the platform fee on the subtotal after coupon discounts",
    )

    model_config = SettingsConfigDict(env_prefix="PRICING_")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def addon_prices(self) -> dict[str, Decimal]:
        """Complete add-on price list: helmet, insurance and any extras."""
        prices = {"helmet": self.helmet_price, "insurance": self.insurance_price}
        prices.update(self.extra_addons)
        return prices


class CatalogSettings(BaseSettings):
    path: Path | None = Field(
        default=None,
        description="JSON bike catalog; the bundled fleet is used when unset",
    )

    model_config = SettingsConfigDict(env_prefix="CATALOG_")


class APISettings(BaseSettings):
    """HTTP API configuration."""

    key: str = ""
    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    model_config = SettingsConfigDict(env_prefix="API_")

    @model_validator(mode="after")
    def validate_credentials_provided(self) -> "APISettings":
        if not self.key:
            raise ValueError("Required credential not provided: API_KEY")
        return self


class CORSSettings(BaseSettings):
    origins: str = "http://localhost:5173,http://localhost:3000"

    model_config = SettingsConfigDict(env_prefix="CORS_")


class Settings(BaseSettings):
    """Root settings container."""

    pricing: PricingSettings = Field(default_factory=PricingSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    api: APISettings = Field(default_factory=APISettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"
    environment: str = "development"

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
