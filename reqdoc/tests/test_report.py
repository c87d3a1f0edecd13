"""
Tests for requirements document rendering.
"""

from datetime import datetime, timezone
from pathlib import Path

from reqdoc.analyzer import AnalysisReport, CategoryResult
from reqdoc.core.types import Summary, SummaryStatus
from reqdoc.report import DocumentGenerator

GENERATED_ON = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _summary(text: str) -> Summary:
    return Summary(text=text, status=SummaryStatus.COMPLETE, chunks_total=1)


def _report(dependencies=None, **categories) -> AnalysisReport:
    report = AnalysisReport(repo_path=Path("repo"), dependencies=dependencies or {})
    for key, value in categories.items():
        if isinstance(value, Exception):
            report.categories[key] = CategoryResult(key=key, title=key, error=str(value))
        elif value is None:
            report.categories[key] = CategoryResult(key=key, title=key, summary=Summary.empty())
        else:
            report.categories[key] = CategoryResult(key=key, title=key, summary=_summary(value))
    return report


def test_header_only_without_content():
    """Nothing found: header and date, no sections, no guidelines."""
    report = _report(system_overview=None, data_models=None)

    document = DocumentGenerator().render(report, generated_on=GENERATED_ON)

    assert document.startswith(
        "# System Requirements Document\nGenerated on: 2024-05-01T12:00:00+00:00\n"
    )
    assert "## " not in document
    assert "Not found" not in document


def test_sections_in_fixed_order():
    """Sections keep their numbers and order, empty ones are skipped."""
    report = _report(
        security_requirements="Use TLS.",
        system_overview="A web shop.",
        data_models=None,
    )

    document = DocumentGenerator().render(report, generated_on=GENERATED_ON)

    assert "## 1. System Overview\nA web shop.\n" in document
    assert "## 7. Security Requirements\nUse TLS.\n" in document
    assert document.index("## 1.") < document.index("## 7.")
    assert "## 5. Data Models" not in document


def test_dependencies_rendered_as_json():
    """Parsed dependencies appear as an indented JSON block."""
    report = _report(dependencies={"python": {"requests": "2.31.0"}})

    document = DocumentGenerator().render(report, generated_on=GENERATED_ON)

    assert "## 4. Dependencies\n```json\n" in document
    assert '  "python": {\n    "requests": "2.31.0"\n  }' in document


def test_failed_category_keeps_heading():
    """A failed analysis is reported, never silently dropped."""
    report = _report(
        system_overview="A CLI tool.",
        api_specifications=RuntimeError("All chunk analyses failed (3 attempted)"),
    )

    document = DocumentGenerator().render(report, generated_on=GENERATED_ON)

    assert (
        "## 6. API Specifications\n_Analysis failed: All chunk analyses failed (3 attempted)_\n"
        in document
    )


def test_guidelines_follow_available_sections():
    """Conditional guideline bullets depend on which sections have content."""
    report = _report(
        system_overview="Overview.",
        api_specifications="GET /items",
        data_models=None,
    )

    document = DocumentGenerator().render(report, generated_on=GENERATED_ON)

    assert "## 8. Implementation Guidelines" in document
    assert "- API implementations should adhere to the specifications provided" in document
    assert "- Integration tests should cover API endpoints" in document
    assert "Data models should be implemented as documented" not in document
    assert "All security requirements must be strictly followed" not in document
    assert "Dependencies should be kept up to date" not in document
    assert "## 10. Deployment Requirements\n- CI/CD pipeline should be implemented\n" in document


def test_guidelines_with_every_section():
    report = _report(
        dependencies={"nodejs": {"express": "^4.18.0"}},
        security_requirements="Hash passwords.",
        api_specifications="POST /login",
        data_models="User(id, email)",
    )

    document = DocumentGenerator().render(report, generated_on=GENERATED_ON)

    for bullet in (
        "- All security requirements must be strictly followed",
        "- Data models should be implemented as documented",
        "- Dependencies should be kept up to date and security patches applied promptly",
        "- Security testing should be performed regularly",
        "- Performance testing should be conducted under expected load",
    ):
        assert bullet in document


def test_write_creates_parent_directories(tmp_path):
    output = tmp_path / "docs" / "requirements.md"
    report = _report(system_overview="Overview.")

    path = DocumentGenerator(output).write(report)

    assert path == output
    content = output.read_text(encoding="utf-8")
    assert content.startswith("# System Requirements Document\n")
    assert "## 1. System Overview\nOverview.\n" in content
