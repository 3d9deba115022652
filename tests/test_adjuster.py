"""Tests for debounced quantity adjustments."""

import asyncio

import pytest

from kitchenbook.db.client import INGREDIENTS
from kitchenbook.inventory.adjuster import QuantityAdjuster


@pytest.fixture
def inventory_db(make_db, sample_inventory_items):
    return make_db({INGREDIENTS: sample_inventory_items})


class TestQuantityAdjuster:
    """Local view updates at once, store writes are debounced."""

    def test_rapid_taps_write_once(self, inventory_db, sample_inventory_items):
        async def scenario():
            adjuster = QuantityAdjuster(inventory_db, delay=0.01)
            adjuster.track(sample_inventory_items)

            assert adjuster.adjust("ing-1", 1) == 7
            assert adjuster.adjust("ing-1", 1) == 8
            assert adjuster.adjust("ing-1", 1) == 9
            assert adjuster.pending == {"ing-1"}

            await asyncio.sleep(0.1)
            return adjuster

        adjuster = asyncio.run(scenario())

        assert inventory_db.ops(INGREDIENTS, "update") == [{"quantity": 9}]
        assert adjuster.pending == set()

    def test_separate_ingredients_write_separately(self, inventory_db, sample_inventory_items):
        async def scenario():
            adjuster = QuantityAdjuster(inventory_db, delay=0.01)
            adjuster.track(sample_inventory_items)
            adjuster.adjust("ing-1", -1)
            adjuster.adjust("ing-3", 100)
            await asyncio.sleep(0.1)

        asyncio.run(scenario())

        assert sorted(u["quantity"] for u in inventory_db.ops(INGREDIENTS, "update")) == [5, 600]

    def test_never_below_zero(self, inventory_db, sample_inventory_items):
        async def scenario():
            adjuster = QuantityAdjuster(inventory_db, delay=0.01)
            adjuster.track(sample_inventory_items)
            result = adjuster.adjust("ing-2", -5)
            await adjuster.flush()
            return result

        assert asyncio.run(scenario()) == 0
        assert inventory_db.ops(INGREDIENTS, "update") == [{"quantity": 0}]

    def test_net_zero_change_skips_write(self, inventory_db, sample_inventory_items):
        async def scenario():
            adjuster = QuantityAdjuster(inventory_db, delay=0.01)
            adjuster.track(sample_inventory_items)
            adjuster.adjust("ing-1", 1)
            adjuster.adjust("ing-1", -1)
            await asyncio.sleep(0.1)

        asyncio.run(scenario())
        assert inventory_db.ops(INGREDIENTS, "update") == []

    def test_flush_writes_pending_now(self, inventory_db, sample_inventory_items):
        async def scenario():
            adjuster = QuantityAdjuster(inventory_db, delay=60)
            adjuster.track(sample_inventory_items)
            adjuster.adjust("ing-1", 2)
            await adjuster.flush()
            return adjuster

        adjuster = asyncio.run(scenario())

        assert adjuster.pending == set()
        assert inventory_db.ops(INGREDIENTS, "update") == [{"quantity": 8}]

    def test_failed_write_rolls_back(self, inventory_db, sample_inventory_items):
        inventory_db.fail_on(INGREDIENTS, "update", RuntimeError("offline"))

        async def scenario():
            adjuster = QuantityAdjuster(inventory_db, delay=0.01)
            adjuster.track(sample_inventory_items)
            adjuster.adjust("ing-1", 3)
            await adjuster.flush()
            return adjuster

        adjuster = asyncio.run(scenario())
        assert adjuster.quantities["ing-1"] == 6

    def test_untracked_ingredient(self, inventory_db):
        adjuster = QuantityAdjuster(inventory_db, delay=0.01)
        with pytest.raises(ValueError, match="not tracked"):
            adjuster.adjust("ing-1", 1)
