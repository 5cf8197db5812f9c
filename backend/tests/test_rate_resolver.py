"""Tests for run-rate resolution."""

import pytest

from punnetplan.schemas import MasterRunRate, SpecificRunRate
from punnetplan.services.errors import RateNotConfigured
from punnetplan.services.rate_resolver import (
    MasterRunRateLookup,
    RateResolver,
    SpecificRunRateLookup,
)


class TestRatePrecedence:
    """Specific rates override master rates for the exact product/line pair."""

    def test_master_rate_used_without_override(self, make_snapshot, product_a, line_1):
        resolver = RateResolver.from_snapshot(make_snapshot())
        assert resolver.resolve_rate(product_a, line_1) == 150

    def test_specific_rate_wins_over_master(self, make_snapshot, product_a, line_1, specific_rate_a):
        """A specific row is returned even though a master row exists."""
        resolver = RateResolver.from_snapshot(make_snapshot(specific_run_rates=[specific_rate_a]))
        assert resolver.resolve_rate(product_a, line_1) == 90

    def test_specific_rate_does_not_leak_to_other_products(
        self, make_snapshot, product_b, line_1, specific_rate_a
    ):
        """An override for product A leaves product B on its master rate."""
        resolver = RateResolver.from_snapshot(make_snapshot(specific_run_rates=[specific_rate_a]))
        assert resolver.resolve_rate(product_b, line_1) == 120

    def test_specific_rate_does_not_leak_to_other_lines(
        self, make_snapshot, line_factory, product_a, size_250, specific_rate_a
    ):
        line_2 = line_factory.create(name="L2")
        snapshot = make_snapshot(
            lines=[line_factory.create(id=specific_rate_a.line_id), line_2],
            master_run_rates=[
                MasterRunRate(punnet_size_id=size_250.id, line_id=line_2.id, packs_per_minute=130),
            ],
            specific_run_rates=[specific_rate_a],
        )
        resolver = RateResolver.from_snapshot(snapshot)
        assert resolver.resolve_rate(product_a, line_2) == 130


class TestRateNotConfigured:
    def test_missing_rate_raises(self, make_snapshot, product_a, line_factory):
        """Neither a specific nor a master row exists for the line."""
        other_line = line_factory.create(name="L9")
        resolver = RateResolver.from_snapshot(make_snapshot())

        with pytest.raises(RateNotConfigured) as exc_info:
            resolver.resolve_rate(product_a, other_line)

        assert exc_info.value.product_id == product_a.id
        assert exc_info.value.line_id == other_line.id
        assert str(product_a.id) in str(exc_info.value)

    def test_empty_chain_raises(self, product_a, line_1):
        with pytest.raises(RateNotConfigured):
            RateResolver([]).resolve_rate(product_a, line_1)


class TestRateChain:
    """The resolver walks its strategies in order, first hit wins."""

    def test_chain_order_is_respected(self, product_a, line_1, size_250):
        specific = SpecificRunRateLookup(
            [SpecificRunRate(product_id=product_a.id, line_id=line_1.id, packs_per_minute=75)]
        )
        master = MasterRunRateLookup(
            [MasterRunRate(punnet_size_id=size_250.id, line_id=line_1.id, packs_per_minute=150)]
        )

        assert RateResolver([specific, master]).resolve_rate(product_a, line_1) == 75
        assert RateResolver([master, specific]).resolve_rate(product_a, line_1) == 150

    def test_extra_tier_can_be_prepended(self, make_snapshot, product_a, line_1):
        """Callers can add an override tier without touching the default lookups."""

        class TrialRate:
            name = "trial"

            def lookup(self, product, line):
                return 42.0 if product.id == product_a.id else None

        default = RateResolver.from_snapshot(make_snapshot())
        resolver = RateResolver([TrialRate(), *default.strategies])
        assert resolver.resolve_rate(product_a, line_1) == 42.0
