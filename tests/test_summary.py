"""Tests for import summaries."""

from kitchenbook.recipe_import.models import ImportResult, ImportSummary
from kitchenbook.recipe_import.summary import format_import_summary, summarize_import


class TestSummarizeImport:
    def test_counts_and_collects(self):
        results = [
            ImportResult(success=True, recipe_name="甲", warnings=["Created new category: 汤"]),
            ImportResult(success=False, recipe_name="乙", error="permission denied", warnings=["w2"]),
            ImportResult(success=True, recipe_name="丙"),
        ]
        summary = summarize_import(results)

        assert summary.succeeded == 2
        assert summary.failed == 1
        assert summary.warnings == ["Created new category: 汤", "w2"]
        assert summary.errors == ["乙: permission denied"]

    def test_empty(self):
        assert summarize_import([]) == ImportSummary(succeeded=0, failed=0)


class TestFormatImportSummary:
    def test_all_succeeded(self):
        text = format_import_summary(ImportSummary(succeeded=3, failed=0))
        assert text == "Import finished\nSucceeded: 3"

    def test_failures_listed(self):
        text = format_import_summary(ImportSummary(succeeded=1, failed=1, errors=["红烧肉: permission denied"]))
        assert text.splitlines() == [
            "Import finished",
            "Succeeded: 1",
            "Failed: 1",
            "",
            "Failed recipes:",
            "- 红烧肉: permission denied",
        ]

    def test_warnings_truncated(self):
        warnings = [f"warning {n}" for n in range(8)]
        text = format_import_summary(ImportSummary(succeeded=1, failed=0, warnings=warnings), warning_preview=5)
        lines = text.splitlines()

        assert "warning 4" in lines
        assert "warning 5" not in lines
        assert lines[-1] == "... and 3 more"

    def test_warnings_exactly_at_preview(self):
        warnings = [f"warning {n}" for n in range(5)]
        text = format_import_summary(ImportSummary(succeeded=1, failed=0, warnings=warnings))
        assert "more" not in text
