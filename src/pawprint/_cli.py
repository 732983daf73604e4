"""Pawprint CLI — pawprint build / pawprint dev / pawprint routes.

Entry point for the ``pawprint`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the pawprint CLI."""
    parser = argparse.ArgumentParser(
        prog="pawprint",
        description="Sitemap and robots.txt from file-based page routes.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # pawprint build
    build_parser = subparsers.add_parser(
        "build",
        help="Write sitemap.xml and robots.txt",
    )
    _add_generation_args(build_parser)
    build_parser.add_argument("--output", default=None, help="Output directory")
    build_parser.add_argument(
        "--no-robots", action="store_true", help="Do not write robots.txt",
    )

    # pawprint dev
    dev_parser = subparsers.add_parser(
        "dev",
        help="Serve sitemap.xml and robots.txt, regenerating on change",
    )
    _add_generation_args(dev_parser)
    dev_parser.add_argument("--host", default=None, help="Bind address")
    dev_parser.add_argument("--port", type=int, default=None, help="Bind port")
    dev_parser.add_argument(
        "--write", action="store_true", help="Also write files after each regeneration",
    )

    # pawprint routes
    routes_parser = subparsers.add_parser(
        "routes",
        help="Print the resolved route table",
    )
    _add_generation_args(routes_parser)

    return parser


def _add_generation_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    parser.add_argument("--pages-dir", default=None, help="Pages directory (default: pages)")
    parser.add_argument("--base-url", default=None, help="Absolute site URL")
    parser.add_argument(
        "--on-clash",
        choices=("ignore", "remove", "error"),
        default=None,
        help="What to do when page files resolve to the same URL",
    )
    parser.add_argument(
        "--convention",
        choices=("directory", "suffix"),
        default=None,
        help="Page file convention: +Page.tsx per directory, or name+Page.tsx",
    )
    parser.add_argument(
        "--print-routes", action="store_true", help="Print every sitemap URL",
    )
    parser.add_argument(
        "--print-ignored", action="store_true", help="Print every ignored page file",
    )


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    """Translate parsed arguments into SitemapConfig overrides (None = not given)."""
    overrides: dict[str, object] = {
        "pages_dir": args.pages_dir,
        "base_url": args.base_url,
        "on_clash": args.on_clash,
        "page_convention": args.convention,
    }
    if args.print_routes or args.print_ignored:
        overrides["debug"] = {
            "print_routes": args.print_routes,
            "print_ignored": args.print_ignored,
        }
    if args.command == "build":
        overrides["output"] = args.output
        if args.no_robots:
            overrides["robots"] = False
    elif args.command == "dev":
        overrides["host"] = args.host
        overrides["port"] = args.port
        if args.write:
            overrides["dev_write"] = True
    return overrides


def _get_version() -> str:
    """Get the package version."""
    from pawprint import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from pawprint._errors import PawprintError
    from pawprint.app import build, dev, routes

    commands = {"build": build, "dev": dev, "routes": routes}
    try:
        commands[args.command](args.root, **_overrides(args))
    except PawprintError as exc:
        print(f"pawprint: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
