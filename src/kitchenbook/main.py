"""
Kitchenbook - CLI Entry Point.

Usage:
    kitchenbook parse recipes.md                Preview what would be imported
    kitchenbook import recipes.md               Import recipes into Supabase
    kitchenbook import recipes.md --policy linked
    kitchenbook low-stock                       Show ingredients to restock
    kitchenbook serve                           Start the web API
    kitchenbook health                          Check configuration
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from kitchenbook.config import settings
from kitchenbook.recipe_import import (
    IngredientPolicy,
    ParsedRecipe,
    format_import_summary,
    import_recipes,
    parse_recipe_markdown,
    summarize_import,
)

app = typer.Typer(
    name="kitchenbook",
    help="Kitchenbook - fridge inventory, recipes and meal planning.",
    add_completion=False,
)
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def _read_document(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Cannot read {path}: {e}[/red]")
        raise typer.Exit(1)


def _recipes_table(recipes: list[ParsedRecipe]) -> Table:
    table = Table(title=f"{len(recipes)} recipe(s)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Category")
    table.add_column("Difficulty", justify="right")
    table.add_column("Ingredients", justify="right")
    table.add_column("Steps", justify="right")
    table.add_column("Tags")

    for number, recipe in enumerate(recipes, start=1):
        table.add_row(
            str(number),
            recipe.name,
            recipe.category,
            str(recipe.difficulty),
            str(len(recipe.ingredients)),
            str(len(recipe.steps)),
            " ".join(f"#{tag}" for tag in recipe.tags),
        )
    return table


@app.command()
def parse(
    path: Path = typer.Argument(..., help="Markdown file with one or more recipes"),
    details: bool = typer.Option(False, "--details", "-d", help="Show ingredients and steps"),
) -> None:
    """Parse an import file and preview the recipes found."""
    recipes = parse_recipe_markdown(_read_document(path), default_unit=settings.default_unit)
    if not recipes:
        console.print("[yellow]No valid recipes found. Check the import format.[/yellow]")
        raise typer.Exit(1)

    console.print(_recipes_table(recipes))

    if details:
        for recipe in recipes:
            console.print(f"\n[bold]{recipe.name}[/bold]")
            for ing in recipe.ingredients:
                optional = " [dim](optional)[/dim]" if ing.optional else ""
                console.print(f"  - {ing.name} {ing.amount}{ing.unit}{optional}")
            for number, step in enumerate(recipe.steps, start=1):
                timer = f" [cyan]({step.duration} min)[/cyan]" if step.duration else ""
                console.print(f"  {number}. {step.description}{timer}")


@app.command("import")
def import_command(
    path: Path = typer.Argument(..., help="Markdown file with one or more recipes"),
    policy: IngredientPolicy = typer.Option(None, "--policy", "-p", help="Ingredient policy (default from settings)"),
    user_id: str = typer.Option(None, "--user-id", help="Owner for the imported recipes"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Parse only, do not save"),
) -> None:
    """Import recipes from a markdown file."""
    recipes = parse_recipe_markdown(_read_document(path), default_unit=settings.default_unit)
    if not recipes:
        console.print("[yellow]No valid recipes found. Check the import format.[/yellow]")
        raise typer.Exit(1)

    console.print(_recipes_table(recipes))
    if dry_run:
        console.print("[dim]Dry run - nothing saved.[/dim]")
        return

    from kitchenbook.db.client import get_service_client

    try:
        client = get_service_client()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    results = asyncio.run(import_recipes(client, recipes, policy=policy, user_id=user_id))
    summary = summarize_import(results)

    style = "green" if not summary.failed else "yellow"
    console.print(f"\n[{style}]{escape(format_import_summary(summary, settings.import_warning_preview))}[/{style}]")
    if summary.failed:
        raise typer.Exit(1)


@app.command("low-stock")
def low_stock() -> None:
    """List ingredients at or below their restock threshold."""
    from kitchenbook.db.client import get_service_client
    from kitchenbook.services.ingredients import get_low_stock

    try:
        rows = asyncio.run(get_low_stock(get_service_client()))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not rows:
        console.print("[green]Everything is stocked.[/green]")
        return

    table = Table(title="Low stock")
    table.add_column("Ingredient", style="bold")
    table.add_column("Quantity", justify="right")
    table.add_column("Threshold", justify="right")
    for row in rows:
        unit = row.get("unit") or ""
        table.add_row(row["name"], f"{row.get('quantity') or 0}{unit}", f"{row.get('threshold') or 0}{unit}")
    console.print(table)


@app.command()
def health() -> None:
    """Check configuration."""
    from kitchenbook.config import get_settings

    console.print("\n[bold]Kitchenbook Health Check[/bold]\n")

    try:
        current = get_settings()
    except Exception as e:
        console.print(f"\n[red]FAIL Configuration error: {e}[/red]")
        console.print("[dim]Make sure you have a .env file with required variables.[/dim]")
        raise typer.Exit(1)

    console.print("[green]OK[/green] Configuration loaded")
    console.print(f"   Environment: {current.kitchen_env}")
    console.print(f"   Log level: {current.log_level}")
    console.print(f"   Ingredient policy: {current.ingredient_policy}")

    if current.supabase_url.startswith("https://"):
        console.print("[green]OK[/green] Supabase URL configured")
    else:
        console.print("[red]FAIL[/red] Supabase URL missing or invalid")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from kitchenbook import __version__

    console.print(f"Kitchenbook version {__version__}")


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the web API server."""
    import uvicorn

    console.print("\n[bold green]Kitchenbook API[/bold green]")
    console.print(f"Starting server on http://localhost:{port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "kitchenbook.web.app:app",
        host="0.0.0.0",
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
