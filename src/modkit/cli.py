"""Command line interface for the module generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Sequence

from .config import ArtifactFlags, GeneratorSettings, ModuleNames
from .errors import GenerationError, ModkitError
from .generators import ModuleGenerator
from .schema import ArtifactStatus, GenerationReport
from .template import StubRenderer

ARTIFACT_OPTIONS = (
    ("model", "Create the Eloquent model"),
    ("controller", "Create the web controller and web routes"),
    ("api", "Create the API controller and API routes"),
    ("migration", "Create the create-table migration"),
    ("vue", "Create the Vue component"),
    ("view", "Create the create/edit/index/show Blade views"),
)


def _parse_key_value_pairs(pairs: Iterable[str]) -> dict[str, str]:
    context: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise argparse.ArgumentTypeError(
                f"invalid key/value pair '{pair}'. Expected KEY=VALUE syntax."
            )
        key, value = pair.split("=", 1)
        key = key.strip()
        if not key:
            raise argparse.ArgumentTypeError("keys must not be empty")
        context[key] = value
    return context


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modkit", description="Scaffold feature modules for Laravel style applications"
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log every file operation")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    subparsers = parser.add_subparsers(dest="command", required=True)

    make_parser = subparsers.add_parser("make", help="create the files of a module")
    make_parser.add_argument("name", help="Module name, e.g. Blog/Posts")
    make_parser.add_argument("--all", action="store_true", help="Create every artifact")
    for option, help_text in ARTIFACT_OPTIONS:
        make_parser.add_argument(f"--{option}", action="store_true", help=help_text)
    make_parser.add_argument(
        "--base-path",
        type=Path,
        default=Path.cwd(),
        help="Project root containing app/ and resources/",
    )
    make_parser.add_argument("--app-path", type=Path, help="Override the application directory")
    make_parser.add_argument(
        "--namespace", help="Root namespace of the application (read from composer.json by default)"
    )
    make_parser.add_argument("--stubs", type=Path, help="Directory with custom stubs")
    make_parser.add_argument(
        "--no-default-stubs",
        action="store_true",
        help="Do not fall back to the stubs bundled with modkit",
    )
    make_parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Continue with the remaining artifacts after a filesystem failure",
    )
    make_parser.add_argument("--json", action="store_true", help="Print the report as JSON")

    render_parser = subparsers.add_parser(
        "render", help="render a stub with literal token replacements"
    )
    render_parser.add_argument("template", type=Path, help="Path to the stub file")
    render_parser.add_argument(
        "-c",
        "--context",
        metavar="TOKEN=VALUE",
        action="append",
        default=[],
        help="Replacement applied to the stub",
    )
    render_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the rendered stub to this path instead of stdout",
    )

    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.verbose:
        return logging.DEBUG
    if args.quiet:
        return logging.ERROR
    return logging.WARNING


def _configure_logging(args: argparse.Namespace) -> None:
    logging.basicConfig(level=_log_level(args), format="%(levelname)s %(name)s: %(message)s")


def _print_report(report: GenerationReport, *, as_json: bool) -> None:
    if as_json:
        sys.stdout.write(json.dumps(report.model_dump(mode="json"), indent=2) + "\n")
        return

    for result in report.results:
        stream = sys.stdout if result.status == ArtifactStatus.CREATED else sys.stderr
        print(f"{result.message} ({result.path})", file=stream)


def _handle_make(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    try:
        settings = GeneratorSettings.from_base_path(
            args.base_path,
            app_path=args.app_path,
            root_namespace=args.namespace,
            stubs=args.stubs,
            default_stubs=not args.no_default_stubs,
        )
        names = ModuleNames.from_name(args.name, root_namespace=settings.root_namespace)
    except ModkitError as exc:
        parser.error(str(exc))

    flags = ArtifactFlags.from_options(
        all=args.all, **{option: getattr(args, option) for option, _ in ARTIFACT_OPTIONS}
    )
    if not flags.any():
        print("Nothing to generate. Pass --all or at least one artifact option.", file=sys.stderr)
        return 0

    generator = ModuleGenerator(names, settings)
    try:
        report = generator.generate(flags, keep_going=args.keep_going)
    except GenerationError as exc:
        _print_report(exc.report, as_json=args.json)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _print_report(report, as_json=args.json)
    return 0 if report.ok else 1


def _handle_render(args: argparse.Namespace) -> int:
    renderer = StubRenderer()
    context = _parse_key_value_pairs(args.context)
    rendered = renderer.render_file(args.template, context, target=args.output)
    if args.output is None:
        sys.stdout.write(rendered)
        if not rendered.endswith("\n"):
            sys.stdout.write("\n")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)
    if args.command == "make":
        return _handle_make(args, parser)
    if args.command == "render":
        return _handle_render(args)
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
