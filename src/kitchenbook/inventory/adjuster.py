"""
Debounced inventory quantity adjustments.

Quantity +/- taps update the local view at once; the store is written
once per ingredient after a quiet period. Each new tap on the same
ingredient restarts its timer.

Usage:
    adjuster = QuantityAdjuster(client)
    adjuster.track(await get_ingredients(client))
    adjuster.adjust("ing-1", +1)   # returns new local quantity
    adjuster.adjust("ing-1", +1)   # restarts the timer
    await adjuster.flush()         # write anything still pending
"""

import asyncio
import logging

from kitchenbook.config import settings
from kitchenbook.db.adapter import DatabaseAdapter
from kitchenbook.services.ingredients import update_ingredient

logger = logging.getLogger(__name__)


class QuantityAdjuster:
    """Optimistic quantity view with one debounced write per ingredient id."""

    def __init__(self, client: DatabaseAdapter, delay: float | None = None):
        self.client = client
        self.delay = settings.adjust_debounce_seconds if delay is None else delay
        self.quantities: dict[str, float] = {}
        self._persisted: dict[str, float] = {}
        self._pending: dict[str, asyncio.Task] = {}

    def track(self, rows: list[dict]) -> None:
        """Load inventory rows as the persisted baseline."""
        for row in rows:
            quantity = row.get("quantity") or 0
            self.quantities[row["id"]] = quantity
            self._persisted[row["id"]] = quantity

    @property
    def pending(self) -> set[str]:
        """Ingredient ids with a write still scheduled."""
        return set(self._pending)

    def adjust(self, ingredient_id: str, delta: float) -> float:
        """
        Apply delta locally and (re)schedule the store write.

        Quantities never go below zero. Must be called from a running
        event loop.
        """
        if ingredient_id not in self.quantities:
            raise ValueError(f"Ingredient {ingredient_id} is not tracked")

        quantity = max(0, self.quantities[ingredient_id] + delta)
        self.quantities[ingredient_id] = quantity

        previous = self._pending.pop(ingredient_id, None)
        if previous is not None:
            previous.cancel()
        self._pending[ingredient_id] = asyncio.create_task(self._write_later(ingredient_id))

        return quantity

    async def flush(self) -> None:
        """Write every pending adjustment now."""
        ids = list(self._pending)
        for ingredient_id in ids:
            self._pending.pop(ingredient_id).cancel()
        for ingredient_id in ids:
            await self._write(ingredient_id)

    async def _write_later(self, ingredient_id: str) -> None:
        await asyncio.sleep(self.delay)
        if self._pending.get(ingredient_id) is asyncio.current_task():
            del self._pending[ingredient_id]
        await self._write(ingredient_id)

    async def _write(self, ingredient_id: str) -> None:
        quantity = self.quantities[ingredient_id]
        if quantity == self._persisted.get(ingredient_id):
            return

        try:
            await update_ingredient(self.client, ingredient_id, {"quantity": quantity})
        except Exception as e:
            # Roll the local view back to what the store holds
            logger.warning(f"Quantity update failed for {ingredient_id}: {e}")
            self.quantities[ingredient_id] = self._persisted[ingredient_id]
            return

        self._persisted[ingredient_id] = quantity
        logger.debug(f"Saved quantity {quantity} for {ingredient_id}")
