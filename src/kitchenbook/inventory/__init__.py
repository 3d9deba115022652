"""Inventory logic: stock matching and debounced quantity adjustments."""
