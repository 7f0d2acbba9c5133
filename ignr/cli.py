"""CLI entrypoints for ignr commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from .errors import IgnrError
from .logging import configure_logging
from .models import GenerateOutcome, GenerateRequest
from .orchestrator import Orchestrator


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    def _default(value: object) -> object:
        return argparse.SUPPRESS if suppress_default else value

    parser.add_argument(
        "--config",
        metavar="PATH",
        default=_default(None),
        help="Override the config file path.",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        default=_default(None),
        help="Also write DEBUG logs to this file.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=_default(False),
        help="Reduce output to only errors.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=_default(0),
        help="Increase logging verbosity (stackable).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=_default(False),
        help="Enable debug logging (same as -vv).",
    )
    formats = parser.add_mutually_exclusive_group()
    formats.add_argument(
        "--json",
        action="store_true",
        default=_default(False),
        help="Output machine readable JSON.",
    )
    formats.add_argument(
        "--yaml",
        action="store_true",
        default=_default(False),
        help="Output machine readable YAML.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=_default(False),
        help="Do not change anything on disk.",
    )
    parser.add_argument(
        "-y",
        "--yes",
        dest="assume_yes",
        action="store_true",
        default=_default(False),
        help='Assume "yes" for interactive prompts.',
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ignr",
        description="Auto-detect languages/tools and generate .gitignore files.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        aliases=["gen", "g"],
        help="Generate .gitignore (auto-detects the stack).",
    )
    _add_common_options(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "-p",
        "--print",
        dest="print_only",
        action="store_true",
        help="Print to stdout instead of writing to .gitignore.",
    )
    generate_parser.add_argument(
        "-a",
        "--append",
        action="store_true",
        help="Append to existing .gitignore instead of replacing the managed section.",
    )
    generate_parser.add_argument(
        "--no-detect",
        action="store_true",
        help="Skip auto-detection, only use explicitly specified templates.",
    )
    generate_parser.add_argument(
        "-t",
        "--add",
        action="append",
        default=[],
        metavar="TEMPLATE",
        help="Additional template to include (repeatable).",
    )
    generate_parser.add_argument(
        "-d",
        "--dir",
        default=".",
        metavar="PATH",
        help="Directory to scan (defaults to current directory).",
    )
    generate_parser.add_argument(
        "--depth",
        type=int,
        default=10,
        help="Maximum directory depth to scan.",
    )
    generate_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Create .gitignore even if not in a git repo.",
    )

    sync_parser = subparsers.add_parser("sync", help="Sync templates from remote source.")
    _add_common_options(sync_parser, suppress_default=True)
    sync_parser.add_argument("--url", help="Override the remote URL to sync from.")

    list_parser = subparsers.add_parser(
        "list", aliases=["ls"], help="List available templates."
    )
    _add_common_options(list_parser, suppress_default=True)

    init_parser = subparsers.add_parser(
        "init", help="Create config directories and default files."
    )
    _add_common_options(init_parser, suppress_default=True)
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Recreate configuration even if it already exists.",
    )

    config_parser = subparsers.add_parser("config", help="Inspect and manage configuration.")
    _add_common_options(config_parser, suppress_default=True)
    config_parser.add_argument(
        "config_command",
        choices=["show", "path", "reset"],
        help="show: effective configuration; path: config file; reset: rewrite defaults.",
    )

    return parser


_COMMAND_ALIASES = {"gen": "generate", "g": "generate", "ls": "list"}


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for ignr commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    command = _COMMAND_ALIASES.get(args.command, args.command)

    configure_logging(
        verbose=int(args.verbose),
        quiet=bool(args.quiet),
        debug=bool(args.debug),
        log_file=Path(args.log_file).expanduser() if args.log_file else None,
    )

    try:
        orchestrator = Orchestrator.from_environment(args.config, dry_run=bool(args.dry_run))
        if command == "generate":
            _handle_generate(orchestrator, args)
        elif command == "sync":
            _handle_sync(orchestrator, args)
        elif command == "list":
            _handle_list(orchestrator, args)
        elif command == "init":
            _handle_init(orchestrator, args)
        elif command == "config":
            _handle_config(orchestrator, args)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (IgnrError, FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except OSError as exc:
        parser.exit(1, f"ignr {command} failed: {exc}\nRun with --verbose for more details.\n")


def _handle_generate(orchestrator: Orchestrator, args: argparse.Namespace) -> None:
    request = GenerateRequest(
        directory=Path(args.dir),
        add=list(args.add),
        no_detect=bool(args.no_detect),
        depth=int(args.depth),
        append=bool(args.append),
        print_only=bool(args.print_only),
        force=bool(args.force),
    )
    outcome = orchestrator.run_generate(request)

    if not outcome.tags:
        if _emit_structured(args, {"detected": [], "message": outcome.message}):
            return
        print(f"{outcome.message}. Use --add to specify templates.")
        return

    if request.print_only:
        payload = {"detected": outcome.tags, "missing": outcome.missing, "content": outcome.content}
        if not _emit_structured(args, payload):
            sys.stdout.write(outcome.content)
        return

    if not outcome.written:
        if args.verbose:
            print(f"Detected: {', '.join(outcome.tags)}")
            print(f"Would write to: {outcome.path}")
        return

    if _emit_structured(
        args,
        {"detected": outcome.tags, "missing": outcome.missing, "path": str(outcome.path)},
    ):
        return
    if not args.quiet:
        print(f"Generated .gitignore with: {', '.join(outcome.tags)}")


def _handle_sync(orchestrator: Orchestrator, args: argparse.Namespace) -> None:
    result = orchestrator.run_sync(args.url)
    if result is None or args.quiet:
        return
    if _emit_structured(
        args, {"found": result.found, "synced": result.synced, "failed": result.failed}
    ):
        return
    print(f"Found {result.found} templates")
    print(f"Synced {result.synced} templates ({result.failed} failed)")


def _handle_list(orchestrator: Orchestrator, args: argparse.Namespace) -> None:
    templates = orchestrator.run_list()
    if _emit_structured(args, templates):
        return
    for name in templates:
        print(name)


def _handle_init(orchestrator: Orchestrator, args: argparse.Namespace) -> None:
    force = bool(args.force) or bool(args.assume_yes)
    created = orchestrator.run_init(force=force)
    if created is not None and not args.quiet:
        print(f"Created config at {created}")


def _handle_config(orchestrator: Orchestrator, args: argparse.Namespace) -> None:
    if args.config_command == "show":
        settings = orchestrator.show_config()
        if args.json:
            print(json.dumps(settings, indent=2))
        else:
            sys.stdout.write(yaml.safe_dump(settings, sort_keys=False))
    elif args.config_command == "path":
        print(orchestrator.paths.config_file)
    else:
        reset = orchestrator.reset_config()
        if reset is not None and not args.quiet:
            print(f"Reset config at {reset}")


def _emit_structured(args: argparse.Namespace, payload: Any) -> bool:
    if args.json:
        print(json.dumps(payload, indent=2))
        return True
    if args.yaml:
        sys.stdout.write(yaml.safe_dump(payload, sort_keys=False, allow_unicode=True))
        return True
    return False


if __name__ == "__main__":
    main(sys.argv[1:])
