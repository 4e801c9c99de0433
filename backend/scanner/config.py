"""Scanner configuration.

Two layers:
- ScannerSettings: paths and switches from environment variables / .env
- thresholds YAML: per-field overrides for the engine's threshold structs

Example thresholds.yaml:

    signals:
      rsi_overbought: 75
      rsi_oversold: 25
    confluence:
      min_agreeing_indicators: 2
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from signal_engine.engine import SignalEngine
from signal_engine.models.config import ConfluenceConfig, SignalConfig

logger = logging.getLogger(__name__)


class ScannerSettings(BaseSettings):
    """Scanner settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # JSON document with prices and indicators per symbol
    data_path: Path = Path("market_data.json")

    # Optional threshold overrides
    thresholds_path: Path = Path("thresholds.yaml")

    # Empty = every symbol in the data file
    symbols: list[str] = []

    confluence: bool = True
    log_level: str = "INFO"


_settings: ScannerSettings | None = None


def get_scanner_settings() -> ScannerSettings:
    """Get cached scanner settings instance."""
    global _settings
    if _settings is None:
        _settings = ScannerSettings()
    return _settings


class ThresholdConfig(BaseModel):
    """Top-level thresholds.yaml configuration."""

    model_config = ConfigDict(extra="forbid")

    signals: SignalConfig = SignalConfig()
    confluence: ConfluenceConfig = ConfluenceConfig()

    def build_engine(self) -> SignalEngine:
        return SignalEngine(config=self.signals, confluence_config=self.confluence)


def load_thresholds(path: Path | None = None) -> ThresholdConfig:
    """Load threshold overrides from a YAML file.

    Falls back to the engine defaults if the file doesn't exist.

    Raises:
        pydantic.ValidationError: If a field has an invalid value.
        ValueError: If the document is not a mapping.
    """
    config_path = path or get_scanner_settings().thresholds_path

    if not config_path.exists():
        logger.info("No thresholds file at %s, using defaults", config_path)
        return ThresholdConfig()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(
            f"{config_path}: expected a mapping at the top level, got {type(raw).__name__}"
        )

    config = ThresholdConfig(**raw)
    logger.info(
        "Loaded thresholds from %s (min agreeing indicators=%d)",
        config_path,
        config.confluence.min_agreeing_indicators,
    )
    return config
