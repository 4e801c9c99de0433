"""Signal, vote and confluence data models."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SignalDirection(str, Enum):
    """Directional bias of a signal."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class SignalType(str, Enum):
    """Closed set of discrete signal kinds."""

    RSI_OVERBOUGHT = "rsi_overbought"
    RSI_OVERSOLD = "rsi_oversold"
    MACD_BULLISH_CROSS = "macd_bullish_cross"
    MACD_BEARISH_CROSS = "macd_bearish_cross"
    BOLLINGER_UPPER_BREAK = "bollinger_upper_break"
    BOLLINGER_LOWER_BREAK = "bollinger_lower_break"
    MA_CROSSOVER_BULLISH = "ma_crossover_bullish"
    MA_CROSSOVER_BEARISH = "ma_crossover_bearish"
    ADX_TREND_STRONG = "adx_trend_strong"
    ADX_TREND_WEAK = "adx_trend_weak"
    STOCH_BULLISH_CROSS = "stoch_bullish_cross"
    STOCH_BEARISH_CROSS = "stoch_bearish_cross"
    WILLR_OVERBOUGHT = "willr_overbought"
    WILLR_OVERSOLD = "willr_oversold"
    CCI_OVERBOUGHT = "cci_overbought"
    CCI_OVERSOLD = "cci_oversold"
    MFI_OVERBOUGHT = "mfi_overbought"
    MFI_OVERSOLD = "mfi_oversold"


def clamp_strength(value: float) -> float:
    """Clamp a raw strength into [0, 1].

    NaN saturates to 1.0, the same way an unbounded ratio does.
    """
    return max(0.0, min(1.0, value))


class Signal(BaseModel):
    """A single-indicator transition event.

    id, created_at and acknowledged belong to the persistence layer;
    the engine always emits id=0, created_at="" and acknowledged=False.
    """

    model_config = ConfigDict(frozen=True)

    id: int = 0
    symbol: str
    signal_type: SignalType
    direction: SignalDirection
    strength: float = Field(ge=0.0, le=1.0)
    price_at_signal: float
    triggered_by: str
    trigger_value: float
    timestamp: date
    created_at: str = ""
    acknowledged: bool = False

    @property
    def key(self) -> tuple[str, SignalType, date]:
        """Natural key used for upserts: (symbol, signal_type, timestamp)."""
        return (self.symbol, self.signal_type, self.timestamp)


class IndicatorVote(BaseModel):
    """One indicator's directional vote in a confluence evaluation."""

    model_config = ConfigDict(frozen=True)

    indicator_name: str
    direction: SignalDirection
    strength: float = Field(ge=0.0, le=1.0)
    value: float


class ConfluenceSignal(BaseModel):
    """Aggregate event emitted when enough indicators agree on one date."""

    model_config = ConfigDict(frozen=True)

    id: int = 0
    symbol: str
    date: date
    direction: SignalDirection
    strength: float = Field(ge=0.0, le=1.0)
    contributing_indicators: tuple[IndicatorVote, ...] = ()
    bullish_count: int = 0
    bearish_count: int = 0
    adx_confidence: float | None = None  # ADX value when above the strong-trend threshold
    price_at_signal: float
    created_at: str = ""

    @property
    def key(self) -> tuple[str, date]:
        """Natural key used for upserts: (symbol, date)."""
        return (self.symbol, self.date)

    @property
    def vote_count(self) -> int:
        return self.bullish_count + self.bearish_count
