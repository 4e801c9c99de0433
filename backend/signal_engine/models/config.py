"""Threshold configuration models."""

from pydantic import BaseModel, ConfigDict, Field


class SignalConfig(BaseModel):
    """Thresholds for the single-indicator crossing detectors."""

    model_config = ConfigDict(frozen=True)

    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0

    # ADX measures trend strength only
    adx_strong_trend: float = 25.0
    adx_weak_trend: float = 20.0

    # Stochastic crosses count inside a band 20 points wider than these
    stoch_overbought: float = 80.0
    stoch_oversold: float = 20.0

    # Williams %R is scaled 0 to -100
    willr_overbought: float = -20.0
    willr_oversold: float = -80.0

    cci_overbought: float = 100.0
    cci_oversold: float = -100.0

    mfi_overbought: float = 80.0
    mfi_oversold: float = 20.0


class ConfluenceConfig(BaseModel):
    """Thresholds for confluence voting.

    Configured independently of SignalConfig; the two may differ.
    """

    model_config = ConfigDict(frozen=True)

    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0
    stoch_overbought: float = 80.0
    stoch_oversold: float = 20.0
    cci_overbought: float = 100.0
    cci_oversold: float = -100.0

    # ADX above this becomes a confidence multiplier, never a vote
    adx_strong_trend: float = 25.0

    min_agreeing_indicators: int = Field(default=3, ge=1)
