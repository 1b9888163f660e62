"""Tests for modules.quotes"""

import random

import pytest

from modules.design_tables import Objective, Tone
from modules.quotes import (
    AI_THEMED_QUOTE_BANK,
    PLAYFUL_EMOJIS,
    QUOTE_BANK,
    QuoteResolver,
    detect_ai_theme,
)
from utils.exceptions import InvariantViolationError


class StubRng:
    def __init__(self, value: float, choice_index: int = 0):
        self.value = value
        self.choice_index = choice_index

    def random(self) -> float:
        return self.value

    def choice(self, seq):
        return seq[self.choice_index]


def test_every_bank_has_eight_quotes() -> None:
    for bank in (QUOTE_BANK, AI_THEMED_QUOTE_BANK):
        for tone in Tone:
            for objective in Objective:
                assert len(bank[tone][objective]) == 8


def test_asking_for_bank_size_walks_bank_in_order() -> None:
    resolver = QuoteResolver(rng=random.Random(0))
    for tone in Tone:
        for objective in Objective:
            assert resolver.generate_quotes(tone, objective, count=8) == list(QUOTE_BANK[tone][objective])


def test_double_count_repeats_each_quote_twice() -> None:
    resolver = QuoteResolver(rng=random.Random(0))
    quotes = resolver.generate_quotes("bold", "conversion", count=16)
    bank = QUOTE_BANK[Tone.BOLD][Objective.CONVERSION]
    assert quotes == [q for q in bank for _ in range(2)]


def test_ai_themed_bank_is_used_when_requested() -> None:
    resolver = QuoteResolver(rng=random.Random(0))
    quotes = resolver.generate_quotes("premium", "sales", is_ai_themed=True, count=8)
    assert quotes == list(AI_THEMED_QUOTE_BANK[Tone.PREMIUM][Objective.SALES])


def test_resolve_spreads_variants_over_the_bank() -> None:
    resolver = QuoteResolver(rng=random.Random(0))
    bank = QUOTE_BANK[Tone.NEUTRAL][Objective.AWARENESS]
    picked = [resolver.resolve("neutral", "awareness", variant_index=i, variant_count=3) for i in range(3)]
    assert picked == [bank[0], bank[2], bank[5]]


def test_unknown_values_use_default_bank() -> None:
    resolver = QuoteResolver(rng=random.Random(0))
    assert resolver.get_bank("mystery", "anything") == QUOTE_BANK[Tone.NEUTRAL][Objective.AWARENESS]


def test_non_positive_counts_raise() -> None:
    resolver = QuoteResolver(rng=random.Random(0))
    with pytest.raises(InvariantViolationError):
        resolver.generate_quotes("neutral", "awareness", count=0)
    with pytest.raises(InvariantViolationError):
        resolver.resolve("neutral", "awareness", variant_count=0)


def test_detect_ai_theme_from_asset_names() -> None:
    assert detect_ai_theme([{"name": "Neural-Headphones.png"}]) is True
    assert detect_ai_theme([{"name": "shoe.png"}], {"tags": ["summer"]}) is False
    assert detect_ai_theme(None, None) is False


def test_detect_ai_theme_from_metadata() -> None:
    assert detect_ai_theme([], {"description": "Machine Learning camera"}) is True
    assert detect_ai_theme([], {"tags": ["robot", "tech"]}) is True


def test_embellish_only_touches_playful_quotes() -> None:
    resolver = QuoteResolver(rng=StubRng(0.9))
    assert resolver.embellish("Shop Now", "bold") == "Shop Now"
    assert resolver.embellish("Shop Now", "playful") == f"Shop Now {PLAYFUL_EMOJIS[0]}"


def test_embellish_skips_quotes_with_emoji_and_low_rolls() -> None:
    assert QuoteResolver(rng=StubRng(0.9)).embellish("Party Time 🎉", "playful") == "Party Time 🎉"
    assert QuoteResolver(rng=StubRng(0.9)).embellish("Sparkle ✨", "playful") == "Sparkle ✨"
    assert QuoteResolver(rng=StubRng(0.5)).embellish("Shop Now", "playful") == "Shop Now"


def test_generate_quotes_is_not_embellished() -> None:
    resolver = QuoteResolver(rng=StubRng(0.9))
    quotes = resolver.generate_quotes("playful", "conversion", count=8)
    assert quotes == list(QUOTE_BANK[Tone.PLAYFUL][Objective.CONVERSION])
