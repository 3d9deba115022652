"""
Kitchenbook - Supabase Client.

Low-level database access. Services receive a client from here.
"""

from supabase import Client, create_client

from kitchenbook.config import settings

# Table names (kc_ = kitchen catalog)
CATEGORIES = "kc_categories"
INGREDIENTS = "kc_ingredients"
RECIPES = "kc_recipes"
RECIPE_INGREDIENTS = "kc_recipe_ingredients"
RECIPE_STEPS = "kc_recipe_steps"
MEAL_PLANS = "kc_meal_plans"

# Singleton client instances
_client: Client | None = None
_service_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client (anon key).

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        if not settings.has_supabase:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


def get_service_client() -> Client:
    """Get a Supabase client using the service-role key (bypasses RLS)."""
    global _service_client

    if _service_client is None:
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client

