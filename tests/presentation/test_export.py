"""Tests for page and JSON export."""

from __future__ import annotations

import json
from pathlib import Path

from sequential_study.presentation.export import (
    TAILWIND_CDN,
    export_json,
    export_page,
    render_page,
    tailwind_config,
)
from sequential_study.services.controller import StudyFlowController


class TestExportPage:
    """Test the standalone HTML page."""

    def test_render_page_embeds_theme(self, controller: StudyFlowController) -> None:
        html = render_page(controller, title="Biology <1>")
        assert html.startswith("<!DOCTYPE html>")
        assert TAILWIND_CDN in html
        assert "<title>Biology &lt;1&gt;</title>" in html
        assert '"primary": "#007AFF"' in html
        assert "Understanding the Concept" in html

    def test_theme_values(self) -> None:
        extend = tailwind_config()["theme"]["extend"]
        assert extend["colors"]["primary-pro"] == "#0071e3"
        assert extend["fontFamily"]["sans"][0] == "Inter"
        assert extend["boxShadow"]["glow"] == "0 0 40px rgba(0, 113, 227, 0.4)"
        assert extend["letterSpacing"] == {"tighter": "-0.04em", "tight": "-0.025em"}

    def test_export_page_writes_file(self, controller: StudyFlowController, tmp_path: Path) -> None:
        out = export_page(controller, tmp_path / "nested" / "page.html")
        assert out.exists()
        assert "Step 1 of 3" in out.read_text(encoding="utf-8")


class TestExportJson:
    """Test the section-list JSON export."""

    def test_writes_sections(self, controller: StudyFlowController, tmp_path: Path) -> None:
        out = export_json(controller, tmp_path / "sections.json")
        data = json.loads(out.read_text(encoding="utf-8"))
        assert [s["title"] for s in data] == [
            "Understanding the Concept",
            "See It in Action",
            "Test Your Understanding",
        ]
