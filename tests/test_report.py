"""Tests for report rendering."""
from branchstats.application.report import format_report, format_repository
from branchstats.domain.models import BranchReport, RepositoryResult


def test_format_repository():
    """Test the per-repository summary line."""
    line = format_repository(RepositoryResult.success("a", ["main", "dev"]))

    assert line == "Repository [a] branches: [main, dev]"


def test_format_report():
    """Test the full report layout."""
    report = BranchReport(
        repositories=(
            RepositoryResult.success("a", ["main", "feature"]),
            RepositoryResult.success("b", ["main"]),
        ),
        histogram={"main": 2, "feature": 1}
    )

    assert format_report(report) == [
        "Repository [a] branches: [main, feature]",
        "Repository [b] branches: [main]",
        "",
        "Percentages",
        "Branch [main] present in 100.00% of valid repositories",
        "Branch [feature] present in 50.00% of valid repositories",
    ]


def test_format_report_without_successes():
    """Test that an empty report prints only the heading."""
    report = BranchReport(
        repositories=(),
        failures=(RepositoryResult.failure("b", "Not Found"),)
    )

    assert format_report(report) == ["", "Percentages"]
