"""Market data models: daily price bars and indicator values."""

from datetime import date

from pydantic import BaseModel, ConfigDict


class DailyPrice(BaseModel):
    """Daily OHLCV bar for one symbol."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int = 0


class TechnicalIndicator(BaseModel):
    """A single precomputed indicator value: (date, name, value)."""

    model_config = ConfigDict(frozen=True)

    symbol: str = ""
    date: date
    indicator_name: str
    value: float
