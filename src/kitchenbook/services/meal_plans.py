"""Daily meal plan operations."""

from datetime import date

from kitchenbook.db.adapter import DatabaseAdapter
from kitchenbook.db.client import MEAL_PLANS

_RECIPE_SUMMARY = "kc_recipes(id, name, difficulty, image, prep_time, cook_time)"


async def get_meal_plans_by_date(client: DatabaseAdapter, plan_date: date | None = None) -> list[dict]:
    """Get the plan for one day (today by default), in the order added."""
    day = (plan_date or date.today()).isoformat()
    response = (
        client.table(MEAL_PLANS)
        .select(f"*, {_RECIPE_SUMMARY}")
        .eq("plan_date", day)
        .order("created_at")
        .execute()
    )
    return response.data or []


async def add_to_meal_plan(client: DatabaseAdapter, recipe_id: str, plan_date: date | None = None) -> dict:
    """Add a recipe to a day's plan."""
    data = {
        "recipe_id": recipe_id,
        "plan_date": (plan_date or date.today()).isoformat(),
        "completed": False,
        "notes": None,
    }
    response = client.table(MEAL_PLANS).insert(data).execute()
    if not response.data:
        raise ValueError("Failed to add recipe to meal plan")
    return response.data[0]


async def remove_from_meal_plan(client: DatabaseAdapter, plan_id: str) -> None:
    """Remove an entry from the plan."""
    client.table(MEAL_PLANS).delete().eq("id", plan_id).execute()


async def set_meal_completed(client: DatabaseAdapter, plan_id: str, completed: bool) -> dict:
    """Mark a plan entry complete or incomplete."""
    response = client.table(MEAL_PLANS).update({"completed": completed}).eq("id", plan_id).execute()
    if not response.data:
        raise ValueError("Meal plan not found")
    return response.data[0]


async def toggle_meal_completed(client: DatabaseAdapter, plan_id: str) -> dict:
    """Flip the completed flag of a plan entry."""
    response = client.table(MEAL_PLANS).select("completed").eq("id", plan_id).limit(1).execute()
    if not response.data:
        raise ValueError("Meal plan not found")
    return await set_meal_completed(client, plan_id, not response.data[0]["completed"])
