#!/usr/bin/env python3
"""Entry point for the zeroprep CLI."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from textwrap import dedent
from typing import Mapping

from zeroprep import __version__
from zeroprep.adapters.application_catalog import FilesystemApplicationCatalog
from zeroprep.adapters.defaults_store import MacDefaultsStore
from zeroprep.adapters.git_source_control import GitSourceControl
from zeroprep.adapters.homebrew import HomebrewPackageManager
from zeroprep.app.staging_service import StagingContext, StagingService
from zeroprep.domain.layout import LayoutError, resolve_layout
from zeroprep.domain.shell import detect_shell
from zeroprep.settings import RuntimeSettings, SettingsError, load_settings
from zeroprep.utils.telemetry import record_event

PROG = "zeroprep"
VALUE_FLAGS = {"-p": "--path", "--path": "--path", "-w": "--workspace", "--workspace": "--workspace"}
SWITCH_FLAGS = {"-h", "--help", "-b", "--bootstrap", "--version"}

SETTINGS: RuntimeSettings | None = None

HELP_OVERVIEW = dedent(
    """
    Generate zero.sh configuration files from your current system settings and
    optionally bootstrap the zero.sh repository.

    Steps:
      1. Generate a Brewfile with installed Homebrew packages.
      2. Capture macOS defaults (built-in system preferences and installed
         applications) into defaults.yaml.
      3. Copy the configuration files of the detected shell to symlinks/shell.
      4. Copy ~/.gitconfig and ~/.config to symlinks/git and symlinks/config.
      5. Create placeholder run/before and run/after scripts.
      6. With --bootstrap, clone zero.sh into zero/ and pin it to its latest tag.
    """
)

HELP_EXAMPLES = dedent(
    f"""
    Examples:
      {PROG} -w home          Create a setup for the 'home' workspace.
      {PROG} -p /path/to/dir  Save configuration files to a custom directory.
      {PROG} -b               Bootstrap the zero.sh repository.
    """
)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"ERROR: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        description=HELP_OVERVIEW,
        epilog=HELP_EXAMPLES,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}")
    parser.add_argument(
        "-p",
        "--path",
        metavar="DIR",
        help="Base directory for all generated files (prompted for when omitted)",
    )
    parser.add_argument(
        "-w",
        "--workspace",
        metavar="NAME",
        help="Workspace name (e.g. home, work, shared); files go to DIR/workspaces/NAME",
    )
    parser.add_argument(
        "-b",
        "--bootstrap",
        action="store_true",
        help="Clone zero.sh into the layout and pin it without running setup",
    )
    return parser


def _is_known_option(token: str) -> bool:
    if token in VALUE_FLAGS or token in SWITCH_FLAGS:
        return True
    if token.startswith(("--path=", "--workspace=")):
        return True
    return token[:2] in {"-p", "-w"} and not token.startswith("--")


def _preprocess_argv(argv: list[str]) -> list[str]:
    """Drop unknown options with a warning and stop at ``--`` or the first operand.

    A value flag always takes the next token, even one starting with ``-``.
    """

    processed: list[str] = []
    index = 0
    while index < len(argv):
        token = argv[index]
        if token == "--":
            break
        if not token.startswith("-") or token == "-":
            break
        if not _is_known_option(token):
            print(f"WARN: Unknown option (ignored): {token}", file=sys.stderr)
            index += 1
            continue
        if token in VALUE_FLAGS and index + 1 < len(argv):
            processed.append(f"{VALUE_FLAGS[token]}={argv[index + 1]}")
            index += 2
            continue
        processed.append(token)
        index += 1
    return processed


def _settings() -> RuntimeSettings:
    return SETTINGS if SETTINGS is not None else load_settings()


def _prompt_output_dir(settings: RuntimeSettings) -> Path:
    default = settings.default_output_dir
    try:
        answer = input(
            "Enter the path to save the zero.sh config files "
            f"(or press Enter to use default: {default}): "
        )
    except EOFError:
        answer = ""
    answer = answer.strip()
    return Path(answer).expanduser() if answer else default


def _build_services(settings: RuntimeSettings) -> StagingService:
    return StagingService(
        package_manager=HomebrewPackageManager(),
        preference_store=MacDefaultsStore(),
        application_catalog=FilesystemApplicationCatalog(settings.application_dirs),
        source_control=GitSourceControl(),
    )


def _build_context(
    args: argparse.Namespace,
    settings: RuntimeSettings,
    env: Mapping[str, str],
) -> StagingContext:
    base = Path(args.path).expanduser() if args.path else _prompt_output_dir(settings)
    layout = resolve_layout(base, args.workspace)
    shell, shell_name = detect_shell(env)
    return StagingContext(
        settings=settings,
        layout=layout,
        shell=shell,
        shell_name=shell_name,
        user_home=settings.user_home,
        bootstrap=args.bootstrap,
    )


def main(argv: list[str] | None = None) -> int:
    raw_args = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(_preprocess_argv(raw_args))
    if args.path is not None and not args.path.strip():
        parser.error('"--path" requires a non-empty option argument.')
    if args.workspace is not None and not args.workspace.strip():
        parser.error('"--workspace" requires a non-empty option argument.')

    try:
        settings = _settings()
    except SettingsError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    try:
        context = _build_context(args, settings, os.environ)
    except LayoutError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    service = _build_services(settings)
    report = service.run(context)
    record_event(
        settings,
        "run",
        {
            "version": settings.cli_version,
            "workspace": context.layout.workspace,
            "bootstrap": context.bootstrap,
            "statuses": report.by_status(),
        },
        component="cli",
    )
    print(f"Configuration files staged in {report.root}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
