"""Catalog services over the Supabase tables (categories, inventory, recipes, meal plans)."""
