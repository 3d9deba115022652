"""Batch import summaries for display."""

from .models import ImportResult, ImportSummary


def summarize_import(results: list[ImportResult]) -> ImportSummary:
    """Count successes and failures and collect warnings and errors."""
    failed = [r for r in results if not r.success]
    return ImportSummary(
        succeeded=len(results) - len(failed),
        failed=len(failed),
        warnings=[warning for r in results for warning in r.warnings],
        errors=[f"{r.recipe_name}: {r.error}" for r in failed],
    )


def format_import_summary(summary: ImportSummary, warning_preview: int = 5) -> str:
    """
    Render a summary as plain text.

    Example:
        Import finished
        Succeeded: 2
        Failed: 1

        Notes:
        Created new category: 家常菜

        Failed recipes:
        - 红烧肉: permission denied
    """
    lines = ["Import finished", f"Succeeded: {summary.succeeded}"]
    if summary.failed:
        lines.append(f"Failed: {summary.failed}")

    if summary.warnings:
        lines += ["", "Notes:", *summary.warnings[:warning_preview]]
        hidden = len(summary.warnings) - warning_preview
        if hidden > 0:
            lines.append(f"... and {hidden} more")

    if summary.errors:
        lines += ["", "Failed recipes:", *(f"- {error}" for error in summary.errors)]

    return "\n".join(lines)
