"""CLI entry point for scriptmark."""

import argparse
import logging
import sys

from rich.console import Console
from rich.text import Text

from scriptmark.convert import html_to_markers, markers_to_html
from scriptmark.core.router import RenderPath, route
from scriptmark.formatting import PROFILES, Document, Formatter, RichContent, get_profile
from scriptmark.rendering import render_document, render_html
from scriptmark.sandbox.context import ConsoleRenderContext, SurfaceAccessError
from scriptmark.sandbox.document import wrapper_document
from scriptmark.tui.app import PreviewApp
import scriptmark.io.logging_setup
import scriptmark.io.settings

logger = logging.getLogger(__name__)


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as f:
        return f.read()


def _print_tokens(console: Console, doc: Document) -> None:
    for index, fl in enumerate(doc.lines):
        line = fl.line
        label = line.role.value if not line.level else f"{line.role.value}/{line.level}"
        console.print(Text(f"{index:>4} {label:<14}", style="dim"), Text(repr(line.text)))
        for span in fl.spans:
            variant = f"({span.variant})" if span.variant else ""
            console.print(Text(f"       {span.kind.value}{variant}", style="dim"), Text(repr(span.payload)))


def _print_rich_content(console: Console, markup: str, width: int) -> None:
    context = ConsoleRenderContext(width=width)
    try:
        context.write(wrapper_document(markup))
    except SurfaceAccessError:
        logger.debug("rich content could not be laid out")
        return
    for line in context.text_lines():
        console.print(Text(line))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render marker-formatted script content")
    parser.add_argument("path", nargs="?", default="-", help="Content file (default: stdin)")
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default=None,
        help="Formatting call site (default: from settings, else content)",
    )
    parser.add_argument("--tokens", action="store_true", help="Dump classified lines and spans")
    parser.add_argument("--html", action="store_true", help="Emit escaped HTML for marker content")
    parser.add_argument(
        "--convert",
        action="store_true",
        help="Convert marker text to editor markup, or editor markup back to markers",
    )
    parser.add_argument("--tui", action="store_true", help="Open the Textual preview")
    parser.add_argument("--width", type=int, default=None, help="Layout width for rich content")
    args = parser.parse_args(argv)

    runtime = scriptmark.io.logging_setup.configure(log_to_file=args.tui)
    if runtime.file_path:
        logger.info("logging to %s", runtime.file_path)
    profile = get_profile(args.profile or scriptmark.io.settings.load_default_profile())
    config = scriptmark.io.settings.load_sandbox_config()

    try:
        source = _read_source(args.path)
    except OSError as e:
        print(f"scriptmark: cannot read {args.path}: {e}", file=sys.stderr)
        return 1

    if args.tui:
        PreviewApp(source, profile=profile, config=config).run()
        return 0

    if args.convert:
        if route(source) is RenderPath.SANDBOX:
            sys.stdout.write(html_to_markers(source) + "\n")
        else:
            sys.stdout.write(markers_to_html(source) + "\n")
        return 0

    console = Console(highlight=False)
    result = Formatter(profile).format(source)
    if isinstance(result, RichContent):
        if args.html:
            # Already markup; pass through untouched.
            sys.stdout.write(result.markup)
            return 0
        _print_rich_content(console, result.markup, args.width or console.width)
        return 0

    if args.tokens:
        _print_tokens(console, result)
    elif args.html:
        sys.stdout.write(render_html(result) + "\n")
    else:
        console.print(render_document(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
