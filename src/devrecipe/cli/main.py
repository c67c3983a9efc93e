#!/usr/bin/env python3
"""
DEVRECIPE CLI
-------------
Command line front-end for devfile conversion.

  devrecipe convert DEVFILE   - build a workspace config from a devfile
  devrecipe filter MANIFEST   - preview a selector against a manifest list

Author: DevRecipe Team
Date: 2026-10-18
"""

import argparse
import io
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from rich.markup import escape
from rich.panel import Panel
from ruamel.yaml import YAML
from ruamel.yaml.scalarstring import LiteralScalarString

from devrecipe.cli.formatter import RecipeFormatter, console
from devrecipe.convert.content import ContentSource, FileContentSource, UrlContentSource
from devrecipe.convert.devfile import DevfileConverter, parse_devfile
from devrecipe.core.errors import DevfileError
from devrecipe.manifest.codec import ManifestListCodec, ManifestParseError
from devrecipe.manifest.machine import resolve_machine_name
from devrecipe.manifest.selector import filter_by_selector

VERSION = "0.1.0"

logger = logging.getLogger("devrecipe.cli")


def parse_selector(pairs: List[str]) -> Dict[str, str]:
    """Turns ["k=v", ...] into a selector map."""
    selector = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Invalid selector '{pair}', expected key=value")
        selector[key] = value
    return selector


class DevRecipeCLI:
    """
    CLI wrapper that translates user commands into converter actions.
    run() returns the process exit code instead of exiting, so it can be driven from tests.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="devrecipe",
            description="DevRecipe - Devfile tool to workspace recipe converter",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = RecipeFormatter()
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("--version", action="version", version=f"devrecipe v{VERSION}")
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Log conversion steps")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        convert_parser = subparsers.add_parser("convert", help="Convert a devfile into a workspace config")
        convert_parser.add_argument("devfile", help="Path to the devfile")
        convert_parser.add_argument("-o", "--output", help="Write the workspace config to this file")
        convert_parser.add_argument("--format", choices=["json", "yaml"], default="json",
                                    help="Output format (default: json)")
        convert_parser.add_argument("--base-url", help="Fetch local references from this URL instead of disk")
        convert_parser.add_argument("--keep-going", action="store_true",
                                    help="Skip failing tools instead of aborting")

        filter_parser = subparsers.add_parser("filter", help="Filter a manifest list by label selector")
        filter_parser.add_argument("manifest", help="Path to a manifest list file")
        filter_parser.add_argument("-l", "--selector", action="append", default=[],
                                   metavar="KEY=VALUE", help="Label constraint (repeatable)")

    def _content_source(self, args: argparse.Namespace, devfile_path: Path) -> ContentSource:
        if args.base_url:
            return UrlContentSource(args.base_url)
        return FileContentSource(devfile_path.parent)

    def _run_convert(self, args: argparse.Namespace) -> int:
        devfile_path = Path(args.devfile).resolve()
        if not devfile_path.is_file():
            console.print(f"[bold red]Error:[/bold red] Devfile '{args.devfile}' not found.")
            return 1

        converter = DevfileConverter(fail_fast=not args.keep_going)
        devfile = parse_devfile(devfile_path.read_text(encoding='utf-8-sig'))
        report = converter.convert(devfile, self._content_source(args, devfile_path))

        self.formatter.print_environments(report)
        self.formatter.print_commands(report)
        self.formatter.print_errors(report.errors)

        rendered = self.render_config(report.config.to_dict(), args.format)
        if args.output:
            Path(args.output).write_text(rendered, encoding='utf-8')
            console.print(f"[green]Workspace config written to {args.output}[/green]")
        else:
            console.print(rendered, markup=False, highlight=False, soft_wrap=True)

        return 0 if report.success else 1

    def _run_filter(self, args: argparse.Namespace) -> int:
        path = Path(args.manifest)
        if not path.is_file():
            console.print(f"[bold red]Error:[/bold red] Manifest '{args.manifest}' not found.")
            return 1

        selector = parse_selector(args.selector)
        codec = ManifestListCodec()
        try:
            objects = codec.parse(path.read_text(encoding='utf-8-sig'))
        except ManifestParseError as e:
            console.print(f"[bold red]Error:[/bold red] {path} is not a manifest list: {escape(str(e))}")
            return 1

        selected = filter_by_selector(objects, selector)
        self.formatter.show_manifest(
            codec.serialize(selected),
            title=f"{len(selected)} of {len(objects)} object(s)",
            machine=resolve_machine_name(selected),
        )
        return 0

    @staticmethod
    def render_config(data: dict, fmt: str) -> str:
        if fmt == "json":
            return json.dumps(data, indent=2) + "\n"

        for environment in data.get("environments", {}).values():
            recipe = environment["recipe"]
            recipe["content"] = LiteralScalarString(recipe["content"])
        yaml = YAML()
        yaml.indent(mapping=2, sequence=4, offset=2)
        stream = io.StringIO()
        yaml.dump(data, stream)
        return stream.getvalue()

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        logging.basicConfig(
            level=logging.INFO if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )

        if args.command is None:
            console.print(Panel.fit(f"[bold cyan]DevRecipe v{VERSION}[/bold cyan]", border_style="cyan"))
            self.parser.print_help()
            return 0

        try:
            if args.command == "convert":
                return self._run_convert(args)
            if args.command == "filter":
                return self._run_filter(args)
        except (DevfileError, argparse.ArgumentTypeError) as e:
            logger.debug("Command failed", exc_info=True)
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}", highlight=False)
            return 1

        self.parser.print_help()
        return 1


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(DevRecipeCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
