"""Export utilities for the study flow.

Supports a self-contained HTML page (Tailwind from the CDN, configured with
the dashboard theme) and a JSON dump of the section list.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from sequential_study.infrastructure.serialization import sections_to_json
from sequential_study.presentation.html import HtmlRenderer, html_escape
from sequential_study.services.controller import StudyFlowController

logger = logging.getLogger(__name__)

TAILWIND_CDN = "https://cdn.tailwindcss.com"

TAILWIND_THEME: dict[str, Any] = {
    "extend": {
        "colors": {
            "primary": "#007AFF",
            "primary-pro": "#0071e3",
            "primary-hover": "#0062cc",
            "dark": "#1d1d1f",
            "subtle": "#86868b",
            "bg": "#F5F5F7",
            "surface": "#FFFFFF",
            "text": "#1D1D1F",
            "text-secondary": "#86868B",
        },
        "fontFamily": {
            "sans": ["Inter", "-apple-system", "BlinkMacSystemFont", "sans-serif"],
        },
        "boxShadow": {
            "soft": "0 4px 20px rgba(0, 0, 0, 0.03)",
            "card": "0 2px 8px rgba(0, 0, 0, 0.04)",
            "apple": "0 4px 24px rgba(0,0,0,0.06)",
            "apple-hover": "0 8px 32px rgba(0,0,0,0.12)",
            "glow": "0 0 40px rgba(0, 113, 227, 0.4)",
        },
        "letterSpacing": {
            "tighter": "-0.04em",
            "tight": "-0.025em",
        },
    },
}

_PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<script src="{cdn}"></script>
<script>
tailwind.config = {config};
</script>
</head>
<body class="bg-bg font-sans text-text">
<main class="max-w-5xl mx-auto p-8">
{body}</main>
</body>
</html>
"""


def tailwind_config() -> dict[str, Any]:
    """The ``tailwind.config`` object embedded in exported pages."""
    return {"theme": TAILWIND_THEME}


def render_page(
    controller: StudyFlowController,
    title: str = "Sequential Study",
    renderer: HtmlRenderer | None = None,
) -> str:
    """Return a full HTML document for the controller's current section."""
    renderer = renderer or HtmlRenderer()
    return _PAGE_TEMPLATE.format(
        title=html_escape(title),
        cdn=TAILWIND_CDN,
        config=json.dumps(tailwind_config(), indent=2),
        body=renderer.render(controller),
    )


def export_page(
    controller: StudyFlowController,
    path: str | Path,
    title: str = "Sequential Study",
) -> Path:
    """Write :func:`render_page` output to *path*.

    Parameters
    ----------
    controller:
        The controller whose current section is exported.
    path:
        File path for the HTML output; parent directories are created.
    title:
        Document title.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_page(controller, title=title), encoding="utf-8")
    logger.info("Exported section %d to %s", controller.current_section_index + 1, out)
    return out


def export_json(controller: StudyFlowController, path: str | Path) -> Path:
    """Write the controller's section list as JSON to *path*."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(sections_to_json(controller.sections), encoding="utf-8")
    return out
