"""
Requirements document generation.

Assembles category summaries and parsed dependencies into a
Markdown System Requirements Document.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from .analyzer import AnalysisReport
from .templates import render

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_PATH = Path("system_requirements_document.md")
DEPENDENCIES_KEY = "dependencies"

# Section number -> category key, in document order
SECTIONS: tuple[tuple[int, str, str], ...] = (
    (1, "system_overview", "System Overview"),
    (2, "functional_requirements", "Functional Requirements"),
    (3, "technical_architecture", "Technical Architecture"),
    (4, DEPENDENCIES_KEY, "Dependencies"),
    (5, "data_models", "Data Models"),
    (6, "api_specifications", "API Specifications"),
    (7, "security_requirements", "Security Requirements"),
)

DEPLOYMENT_GUIDELINES = (
    "CI/CD pipeline should be implemented",
    "Environment-specific configurations should be managed through environment variables",
    "Logging and monitoring should be implemented",
    "Regular backups should be configured where applicable",
)


class DocumentGenerator:
    """Render an AnalysisReport as Markdown and write it to disk.

    Sections without content are left out. Categories whose analysis
    failed keep their heading with a failure note, so a failed
    analysis is never mistaken for an empty one.
    """

    def __init__(self, output_path: Union[str, Path] = DEFAULT_OUTPUT_PATH):
        self.output_path = Path(output_path)

    def render(
        self,
        report: AnalysisReport,
        generated_on: Optional[datetime] = None,
    ) -> str:
        """Render the document text."""
        generated_on = generated_on or datetime.now(timezone.utc)
        sections = self._build_sections(report)

        return render(
            "requirements.md.j2",
            generated_on=generated_on.isoformat(),
            sections=sections,
            guidelines=self._build_guidelines(report) if self._has_content(report) else None,
        )

    def write(self, report: AnalysisReport) -> Path:
        """Render the document and write it to output_path."""
        content = self.render(report)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(content, encoding="utf-8")
        logger.info(f"Wrote requirements document to {self.output_path}")
        return self.output_path

    def _build_sections(self, report: AnalysisReport) -> list[dict[str, Any]]:
        sections: list[dict[str, Any]] = []

        for number, key, title in SECTIONS:
            if key == DEPENDENCIES_KEY:
                if report.dependencies:
                    sections.append({
                        "number": number,
                        "title": title,
                        "body": json.dumps(report.dependencies, indent=2),
                        "code": True,
                    })
                continue

            result = report.get(key)
            if result is None:
                continue
            if result.failed:
                sections.append({
                    "number": number,
                    "title": title,
                    "error": result.error,
                    "failed": True,
                })
            elif result.has_content:
                sections.append({
                    "number": number,
                    "title": title,
                    "body": result.summary.text.strip(),
                })

        return sections

    def _has_content(self, report: AnalysisReport) -> bool:
        return bool(report.dependencies) or any(
            result.has_content for result in report.categories.values()
        )

    def _build_guidelines(self, report: AnalysisReport) -> dict[str, list[str]]:
        has_security = report.has_content("security_requirements")
        has_api = report.has_content("api_specifications")
        has_models = report.has_content("data_models")

        implementation = [
            "The system should be implemented following the architecture and patterns described above",
        ]
        if has_security:
            implementation.append("All security requirements must be strictly followed")
        if has_api:
            implementation.append("API implementations should adhere to the specifications provided")
        if has_models:
            implementation.append("Data models should be implemented as documented")
        if report.dependencies:
            implementation.append(
                "Dependencies should be kept up to date and security patches applied promptly"
            )

        testing = ["Unit tests should be written for all components"]
        if has_api:
            testing.append("Integration tests should cover API endpoints")
        if has_security:
            testing.append("Security testing should be performed regularly")
        testing.append("Performance testing should be conducted under expected load")

        return {
            "implementation": implementation,
            "testing": testing,
            "deployment": list(DEPLOYMENT_GUIDELINES),
        }
