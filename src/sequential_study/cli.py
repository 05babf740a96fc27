"""Command-line interface for the sequential study flow.

Provides subcommands for inspecting, walking through, rendering and
exporting study plans, and for running the local dev server.  The dev
server stack is imported lazily so that the document commands start fast.

Entry point
-----------
The ``main()`` function is registered as a console script in
``pyproject.toml``::

    [project.scripts]
    sequential-study = "sequential_study.cli:main"

Usage examples::

    sequential-study preview plan.json
    sequential-study walk plan.yaml
    sequential-study render plan.json --section 2 --output page.html
    sequential-study export-json plan.json --output sections.json
    sequential-study serve --root ./site --port 5500
    sequential-study info
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from rich.console import Console


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="sequential-study",
        description="Sequential study flow -- step through a study plan section by section.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        default=False,
        help="Show version and exit.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available subcommands")

    # -- preview -----------------------------------------------------------
    preview_parser = subparsers.add_parser(
        "preview",
        help="Show the section outline of a study plan.",
    )
    preview_parser.add_argument("document", help="Study plan (.json, .yaml, .yml).")

    # -- walk --------------------------------------------------------------
    walk_parser = subparsers.add_parser(
        "walk",
        help="Step through a study plan interactively.",
    )
    walk_parser.add_argument("document", help="Study plan (.json, .yaml, .yml).")

    # -- render ------------------------------------------------------------
    render_parser = subparsers.add_parser(
        "render",
        help="Write a section as a standalone HTML page.",
    )
    render_parser.add_argument("document", help="Study plan (.json, .yaml, .yml).")
    render_parser.add_argument(
        "--section",
        type=int,
        default=1,
        help="1-based section to render (default: 1).",
    )
    render_parser.add_argument(
        "--output",
        type=str,
        default="study.html",
        help="Output HTML path (default: study.html).",
    )
    render_parser.add_argument(
        "--title",
        type=str,
        default="Sequential Study",
        help="Page title.",
    )

    # -- export-json -------------------------------------------------------
    export_parser = subparsers.add_parser(
        "export-json",
        help="Dump the section list as JSON.",
    )
    export_parser.add_argument("document", help="Study plan (.json, .yaml, .yml).")
    export_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output path (default: stdout).",
    )

    # -- serve -------------------------------------------------------------
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the local dev server with mock authentication.",
    )
    serve_parser.add_argument("--root", type=str, default=".", help="Site root directory.")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address.")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port (default: $PORT or 5500).",
    )
    serve_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Config file with a dev_server section.",
    )

    # -- info --------------------------------------------------------------
    subparsers.add_parser(
        "info",
        help="Show version and default configuration.",
    )

    return parser


# =========================================================================
# Subcommand handlers
# =========================================================================

def _load_controller(path: str) -> Any:
    from sequential_study.infrastructure.serialization import load_document
    from sequential_study.services.controller import StudyFlowController

    return StudyFlowController.create(load_document(path))


def _cmd_preview(args: argparse.Namespace) -> int:
    from sequential_study.presentation.console import StudyConsole

    controller = _load_controller(args.document)
    StudyConsole().print_outline(controller)
    return 0


def _cmd_walk(args: argparse.Namespace) -> int:
    from sequential_study.presentation.console import StudyConsole, run_walkthrough

    controller = _load_controller(args.document)
    study_console = StudyConsole()
    result = run_walkthrough(controller, study_console, input)
    study_console.console.print("[bold green]Study plan complete.[/bold green]")
    if result is not None:
        study_console.console.print(f"Final score: {result.score}/{result.total}")
    return 0


def _cmd_render(args: argparse.Namespace) -> int:
    from sequential_study.domain.enums import NavigationSignal
    from sequential_study.presentation.export import export_page

    controller = _load_controller(args.document)
    count = len(controller.sections)
    if not 1 <= args.section <= count:
        print(f"Error: section must be in [1, {count}]", file=sys.stderr)
        return 1
    for _ in range(args.section - 1):
        if controller.advance() is not NavigationSignal.ADVANCED:
            print(f"Error: cannot reach section {args.section}", file=sys.stderr)
            return 1
    out = export_page(controller, args.output, title=args.title)
    print(f"Wrote {out}")
    return 0


def _cmd_export_json(args: argparse.Namespace) -> int:
    from sequential_study.infrastructure.serialization import sections_to_json
    from sequential_study.presentation.export import export_json

    controller = _load_controller(args.document)
    if args.output is None:
        print(sections_to_json(controller.sections))
    else:
        out = export_json(controller, args.output)
        print(f"Wrote {out}")
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    from dataclasses import replace

    from sequential_study.infrastructure.config import DevServerConfig, load_config_file
    from sequential_study.infrastructure.dev_server import run

    if args.config:
        sections = load_config_file(args.config)
        config = sections.get("dev_server", DevServerConfig(root=args.root))
    else:
        config = DevServerConfig.from_env(root=args.root)

    overrides: dict[str, Any] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if overrides:
        config = replace(config, **overrides)
    config.validate()

    run(config)
    return 0


def _cmd_info(args: argparse.Namespace) -> int:
    from sequential_study import __version__
    from sequential_study.infrastructure.config import DevServerConfig, TransitionConfig
    from sequential_study.services.sections import MAX_QUIZ_QUESTIONS, TITLES

    console = Console()
    console.print(f"[bold]sequential-study[/bold] {__version__}")
    console.print()
    console.print("Sections:")
    for title in TITLES.values():
        console.print(f"  - {title}")
    console.print(f"Quiz questions per plan: {MAX_QUIZ_QUESTIONS}")
    console.print()
    console.print(f"Transition defaults: {TransitionConfig().to_dict()}")
    console.print(f"Dev server defaults: {DevServerConfig().to_dict()}")
    return 0


# =========================================================================
# Main entry point
# =========================================================================

def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parameters
    ----------
    argv:
        Command-line arguments.  Defaults to ``sys.argv[1:]``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    if args.version:
        from sequential_study import __version__
        print(f"sequential-study {__version__}")
        sys.exit(0)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    handlers: dict[str, Any] = {
        "preview": _cmd_preview,
        "walk": _cmd_walk,
        "render": _cmd_render,
        "export-json": _cmd_export_json,
        "serve": _cmd_serve,
        "info": _cmd_info,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        exit_code = handler(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        exit_code = 130
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)
