"""
Kitchenbook - household kitchen management.

Areas:
- Fridge: ingredient inventory with low-stock and expiry tracking
- Recipes: catalog, markdown import, stock matching
- Meal plan: per-day list of recipes to cook
"""

__version__ = "1.0.0"
