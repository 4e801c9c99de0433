"""Tests for confluence voting."""

from datetime import date

import pytest
from pydantic import ValidationError

from signal_engine.confluence import (
    VoteTally,
    adx_confidence,
    apply_adx_confidence,
    collect_votes,
    evaluate_confluence,
)
from signal_engine.engine import SignalEngine
from signal_engine.models import (
    ConfluenceConfig,
    IndicatorVote,
    SignalDirection,
)

DAY = date(2026, 1, 21)


def _bullish_set(**overrides: float) -> dict[str, float]:
    indicators = {
        "RSI_14": 25.0,          # below 30
        "MACD_12_26": 1.5,       # above signal
        "MACD_SIGNAL_9": 1.0,
        "STOCH_K_14": 15.0,      # below 20
        "CCI_20": -150.0,        # below -100
        "BB_UPPER_20": 110.0,
        "BB_LOWER_20": 90.0,
    }
    indicators.update(overrides)
    return indicators


def _bearish_set() -> dict[str, float]:
    return {
        "RSI_14": 80.0,          # above 70
        "MACD_12_26": 0.5,       # below signal
        "MACD_SIGNAL_9": 1.0,
        "STOCH_K_14": 85.0,      # above 80
        "CCI_20": 150.0,         # above 100
        "BB_UPPER_20": 100.0,
        "BB_LOWER_20": 80.0,
    }


class TestConfluenceDecision:
    """Minimum agreement and direction."""

    def test_bullish_confluence(self):
        engine = SignalEngine()
        indicators = _bullish_set(ADX_14=30.0)

        result = engine.detect_confluence("AAPL", DAY, 85.0, indicators)

        assert result is not None
        assert result.direction == SignalDirection.BULLISH
        assert result.bullish_count == 5
        assert result.bearish_count == 0
        assert result.adx_confidence == 30.0
        assert result.symbol == "AAPL"
        assert result.date == DAY
        assert result.price_at_signal == 85.0
        assert result.id == 0
        assert result.created_at == ""

        strengths = [5.0 / 30.0, 0.5 / 85.0 * 100.0, 0.5, 0.25, 0.5]
        expected = sum(strengths) / 5 * (30.0 / 25.0)
        assert result.strength == pytest.approx(expected)

    def test_bearish_confluence(self):
        engine = SignalEngine()

        result = engine.detect_confluence("TSLA", DAY, 105.0, _bearish_set())

        assert result is not None
        assert result.direction == SignalDirection.BEARISH
        assert result.bearish_count >= 3
        assert result.bearish_count == 5
        assert result.adx_confidence is None

        strengths = [10.0 / 30.0, 0.5 / 105.0 * 100.0, 0.5, 0.25, 0.5]
        assert result.strength == pytest.approx(sum(strengths) / 5)

    def test_insufficient_agreement(self):
        engine = SignalEngine()
        indicators = {
            "RSI_14": 25.0,          # bullish
            "MACD_12_26": 0.5,       # bearish
            "MACD_SIGNAL_9": 1.0,
            "STOCH_K_14": 15.0,      # bullish
            "CCI_20": 50.0,          # neutral
            "BB_UPPER_20": 110.0,
            "BB_LOWER_20": 90.0,
        }

        assert engine.detect_confluence("MSFT", DAY, 100.0, indicators) is None

    def test_plurality_below_minimum(self):
        config = ConfluenceConfig(min_agreeing_indicators=5)
        indicators = _bullish_set()

        # Four bullish votes; price inside the bands
        assert evaluate_confluence("AAPL", DAY, 100.0, indicators, config) is None

    def test_bullish_checked_first(self):
        config = ConfluenceConfig(min_agreeing_indicators=2)
        indicators = {
            "RSI_14": 25.0,          # bullish
            "STOCH_K_14": 15.0,      # bullish
            "CCI_20": 150.0,         # bearish
            "MACD_12_26": 0.5,       # bearish
            "MACD_SIGNAL_9": 1.0,
        }

        result = evaluate_confluence("AAPL", DAY, 100.0, indicators, config)

        assert result.direction == SignalDirection.BULLISH
        assert result.bullish_count == 2
        assert result.bearish_count == 2
        assert len(result.contributing_indicators) == 4

    def test_non_voting_indicators(self):
        config = ConfluenceConfig(min_agreeing_indicators=1)
        indicators = {
            "WILLR_14": -95.0,
            "MFI_14": 5.0,
            "SMA_20": 90.0,
            "SMA_50": 100.0,
            "ADX_14": 45.0,
        }

        assert evaluate_confluence("AAPL", DAY, 100.0, indicators, config) is None

    def test_empty_indicators(self):
        assert SignalEngine().detect_confluence("AAPL", DAY, 100.0, {}) is None

    def test_min_agreeing_must_be_positive(self):
        with pytest.raises(ValidationError):
            ConfluenceConfig(min_agreeing_indicators=0)


class TestAdxConfidence:
    """ADX as a strength multiplier."""

    def test_adx_boost(self):
        engine = SignalEngine()
        weak = engine.detect_confluence("TEST", DAY, 100.0, _bullish_set(ADX_14=15.0))
        strong = engine.detect_confluence("TEST", DAY, 100.0, _bullish_set(ADX_14=40.0))

        assert weak is not None
        assert strong is not None
        assert weak.adx_confidence is None
        assert strong.adx_confidence == 40.0
        assert strong.strength >= weak.strength
        assert strong.strength == pytest.approx(min(1.0, weak.strength * 1.6))

    def test_threshold_is_exclusive(self):
        assert adx_confidence({"ADX_14": 25.0}, ConfluenceConfig()) is None
        assert adx_confidence({"ADX_14": 25.5}, ConfluenceConfig()) == 25.5
        assert adx_confidence({}, ConfluenceConfig()) is None

    def test_multiplier_capped(self):
        assert apply_adx_confidence(0.3, None) == 0.3
        assert apply_adx_confidence(0.3, 100.0) == pytest.approx(0.6)
        assert apply_adx_confidence(0.6, 100.0) == 1.0

    def test_custom_strong_trend_threshold(self):
        config = ConfluenceConfig(adx_strong_trend=35.0)
        result = evaluate_confluence("AAPL", DAY, 100.0, _bullish_set(ADX_14=30.0), config)
        assert result.adx_confidence is None


class TestVotes:
    """Individual voting sources."""

    def test_vote_order_and_labels(self):
        tally = collect_votes(_bullish_set(), 85.0, ConfluenceConfig())

        assert [v.indicator_name for v in tally.votes] == [
            "RSI_14",
            "MACD",
            "BB_LOWER",
            "STOCH_K",
            "CCI_20",
        ]
        assert [v.value for v in tally.votes] == [25.0, 1.5, 85.0, 15.0, -150.0]

    def test_bollinger_upper_vote(self):
        tally = collect_votes(
            {"BB_UPPER_20": 100.0, "BB_LOWER_20": 80.0}, 105.0, ConfluenceConfig()
        )

        (vote,) = tally.votes
        assert vote.indicator_name == "BB_UPPER"
        assert vote.direction == SignalDirection.BEARISH
        assert vote.strength == pytest.approx(0.5)

    def test_equal_macd_lines_abstain(self):
        tally = collect_votes(
            {"MACD_12_26": 1.0, "MACD_SIGNAL_9": 1.0}, 100.0, ConfluenceConfig()
        )
        assert tally.votes == []

    def test_confluence_thresholds_independent(self):
        # 72 is overbought for the detectors but not for these thresholds
        config = ConfluenceConfig(rsi_overbought=75.0)
        tally = collect_votes({"RSI_14": 72.0}, 100.0, config)
        assert tally.votes == []

    def test_vote_strength_clamped(self):
        tally = collect_votes({"CCI_20": -400.0}, 100.0, ConfluenceConfig())
        assert tally.votes[0].strength == 1.0

    def test_tally_decide(self):
        tally = VoteTally()
        tally.add(IndicatorVote(indicator_name="A", direction=SignalDirection.BEARISH, strength=0.2, value=1))
        tally.add(IndicatorVote(indicator_name="B", direction=SignalDirection.BEARISH, strength=0.4, value=1))

        assert tally.decide(3) is None
        direction, strength = tally.decide(2)
        assert direction == SignalDirection.BEARISH
        assert strength == pytest.approx(0.3)
