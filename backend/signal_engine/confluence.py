"""Confluence voting: combine several indicators' directional bias on one date.

Five sources vote (RSI, MACD vs signal, price vs Bollinger Bands,
Stochastic %K, CCI), each a level test with no look-back. Williams %R,
MFI, SMA crossover and ADX never vote; ADX above the strong-trend
threshold only scales the final strength.

Decision order is fixed: bullish is checked first, then bearish. A source
votes at most one way, so both sides can only reach the minimum together
when it is at most half the number of sources; bullish wins then.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from signal_engine.indicators import names
from signal_engine.indicators.index import IndicatorValues
from signal_engine.models.config import ConfluenceConfig
from signal_engine.models.signal import (
    ConfluenceSignal,
    IndicatorVote,
    SignalDirection,
    clamp_strength,
)

# ADX / ADX_SCALE is the strength multiplier, capped at MAX_ADX_MULTIPLIER
ADX_SCALE = 25.0
MAX_ADX_MULTIPLIER = 2.0

VoteFn = Callable[[IndicatorValues, float, ConfluenceConfig], "IndicatorVote | None"]


def _vote(name: str, direction: SignalDirection, strength: float, value: float) -> IndicatorVote:
    return IndicatorVote(
        indicator_name=name,
        direction=direction,
        strength=clamp_strength(strength),
        value=value,
    )


def rsi_vote(
    indicators: IndicatorValues, price: float, config: ConfluenceConfig
) -> IndicatorVote | None:
    rsi = indicators.get(names.RSI)
    if rsi is None:
        return None
    if rsi < config.rsi_oversold:
        return _vote(names.RSI, SignalDirection.BULLISH, (config.rsi_oversold - rsi) / 30.0, rsi)
    if rsi > config.rsi_overbought:
        return _vote(names.RSI, SignalDirection.BEARISH, (rsi - config.rsi_overbought) / 30.0, rsi)
    return None


def macd_vote(
    indicators: IndicatorValues, price: float, config: ConfluenceConfig
) -> IndicatorVote | None:
    """Sign of MACD minus its signal line; equal lines abstain."""
    macd = indicators.get(names.MACD)
    signal = indicators.get(names.MACD_SIGNAL)
    if macd is None or signal is None:
        return None
    diff = macd - signal
    strength = abs(diff) / max(price, 1.0) * 100.0
    if diff > 0.0:
        return _vote("MACD", SignalDirection.BULLISH, strength, macd)
    if diff < 0.0:
        return _vote("MACD", SignalDirection.BEARISH, strength, macd)
    return None


def bollinger_vote(
    indicators: IndicatorValues, price: float, config: ConfluenceConfig
) -> IndicatorVote | None:
    """Price outside the bands, measured against the half-band width.

    The midpoint is derived from the two bands; BB_MIDDLE_20 is not needed.
    """
    upper = indicators.get(names.BB_UPPER)
    lower = indicators.get(names.BB_LOWER)
    if upper is None or lower is None:
        return None
    middle = (upper + lower) / 2.0
    if price < lower:
        return _vote(
            "BB_LOWER",
            SignalDirection.BULLISH,
            (lower - price) / max(middle - lower, 0.01),
            price,
        )
    if price > upper:
        return _vote(
            "BB_UPPER",
            SignalDirection.BEARISH,
            (price - upper) / max(upper - middle, 0.01),
            price,
        )
    return None


def stochastic_vote(
    indicators: IndicatorValues, price: float, config: ConfluenceConfig
) -> IndicatorVote | None:
    stoch_k = indicators.get(names.STOCH_K)
    if stoch_k is None:
        return None
    if stoch_k < config.stoch_oversold:
        return _vote(
            "STOCH_K", SignalDirection.BULLISH, (config.stoch_oversold - stoch_k) / 20.0, stoch_k
        )
    if stoch_k > config.stoch_overbought:
        return _vote(
            "STOCH_K", SignalDirection.BEARISH, (stoch_k - config.stoch_overbought) / 20.0, stoch_k
        )
    return None


def cci_vote(
    indicators: IndicatorValues, price: float, config: ConfluenceConfig
) -> IndicatorVote | None:
    cci = indicators.get(names.CCI)
    if cci is None:
        return None
    if cci < config.cci_oversold:
        return _vote(names.CCI, SignalDirection.BULLISH, abs((config.cci_oversold - cci) / 100.0), cci)
    if cci > config.cci_overbought:
        return _vote(names.CCI, SignalDirection.BEARISH, abs((cci - config.cci_overbought) / 100.0), cci)
    return None


# Voting sources, in the order votes are recorded
VOTERS: tuple[VoteFn, ...] = (
    rsi_vote,
    macd_vote,
    bollinger_vote,
    stochastic_vote,
    cci_vote,
)


@dataclass
class VoteTally:
    """Running bullish/bearish counts and strength sums."""

    votes: list[IndicatorVote] = field(default_factory=list)
    bullish_count: int = 0
    bearish_count: int = 0
    bullish_strength: float = 0.0
    bearish_strength: float = 0.0

    def add(self, vote: IndicatorVote) -> None:
        self.votes.append(vote)
        if vote.direction == SignalDirection.BULLISH:
            self.bullish_count += 1
            self.bullish_strength += vote.strength
        elif vote.direction == SignalDirection.BEARISH:
            self.bearish_count += 1
            self.bearish_strength += vote.strength

    def decide(self, min_required: int) -> tuple[SignalDirection, float] | None:
        """Return (direction, average strength) if one side has enough votes."""
        if self.bullish_count >= min_required:
            return SignalDirection.BULLISH, self.bullish_strength / self.bullish_count
        if self.bearish_count >= min_required:
            return SignalDirection.BEARISH, self.bearish_strength / self.bearish_count
        return None


def collect_votes(
    indicators: IndicatorValues, price: float, config: ConfluenceConfig
) -> VoteTally:
    """Run every voting source against one date's indicators."""
    tally = VoteTally()
    for voter in VOTERS:
        vote = voter(indicators, price, config)
        if vote is not None:
            tally.add(vote)
    return tally


def adx_confidence(indicators: IndicatorValues, config: ConfluenceConfig) -> float | None:
    """ADX value if it signals a strong trend, else None."""
    adx = indicators.get(names.ADX)
    if adx is not None and adx > config.adx_strong_trend:
        return adx
    return None


def apply_adx_confidence(base_strength: float, adx: float | None) -> float:
    """Scale strength by adx/25 (at most 2x), capped at 1.0."""
    if adx is None:
        return base_strength
    return min(1.0, base_strength * min(MAX_ADX_MULTIPLIER, adx / ADX_SCALE))


def evaluate_confluence(
    symbol: str,
    on_date: date,
    price: float,
    indicators: IndicatorValues,
    config: ConfluenceConfig,
) -> ConfluenceSignal | None:
    """Decide whether enough indicators agree on one date.

    Args:
        symbol: Symbol being scanned.
        on_date: Date of the indicator values.
        price: Closing price on that date.
        indicators: Indicator name -> value for the date.
        config: Confluence thresholds and minimum agreement.

    Returns:
        ConfluenceSignal if either side reaches the minimum, None otherwise.
    """
    tally = collect_votes(indicators, price, config)
    adx = adx_confidence(indicators, config)

    decision = tally.decide(config.min_agreeing_indicators)
    if decision is None:
        return None
    direction, base_strength = decision

    return ConfluenceSignal(
        symbol=symbol,
        date=on_date,
        direction=direction,
        strength=clamp_strength(apply_adx_confidence(base_strength, adx)),
        contributing_indicators=tuple(tally.votes),
        bullish_count=tally.bullish_count,
        bearish_count=tally.bearish_count,
        adx_confidence=adx,
        price_at_signal=price,
    )
