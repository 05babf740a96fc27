"""Presentation layer: HTML rendering, async session, export and console output."""

from sequential_study.presentation.console import StudyConsole, run_walkthrough
from sequential_study.presentation.export import export_json, export_page, render_page
from sequential_study.presentation.html import HtmlRenderer, format_summary
from sequential_study.presentation.session import RenderSurface, StudySession

__all__ = [
    "HtmlRenderer",
    "format_summary",
    "RenderSurface",
    "StudySession",
    "export_page",
    "export_json",
    "render_page",
    "StudyConsole",
    "run_walkthrough",
]
