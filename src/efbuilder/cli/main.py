# Copyright 2026 EFBuilder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the EFBuilder command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from yachalk import chalk

from efbuilder.codegen.generator import FILE_EXTENSION, write_files
from efbuilder.compiler.artifact import serialize, write_artifact
from efbuilder.compiler.build import CompilerError, check_sources, compile_sources, parse_entities
from efbuilder.logging_config import setup_logging
from efbuilder.sources.providers import DirectorySourceProvider, EntitySource
from efbuilder.workspace.config import (
    CONFIG_FILE_NAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    load_workspace_config,
    save_workspace_config,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the EFBuilder CLI."""
    parser = argparse.ArgumentParser(
        prog="efbuilder",
        description="EFBuilder: compile entity definitions into Entity Framework Core classes",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a new EFBuilder workspace",
        description=f"Write a default {CONFIG_FILE_NAME} into a directory of entity sources.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to initialize the workspace in (default: current directory)",
    )
    init_parser.add_argument("--namespace", help="Namespace of the generated classes")
    init_parser.add_argument("--base-class-namespace", help="Namespace imported by entities with a base class")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check the entity sources for errors",
        description="Parse and resolve all entity sources and report errors and warnings.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the entity sources (default: current directory)",
    )

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate C# entity and configuration classes",
        description="Compile all entity sources and write one .cs file per entity.",
    )
    generate_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the entity sources (default: current directory)",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        help="Output directory (default: the workspace's output-directory)",
    )
    generate_parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace files that already exist in the output directory",
    )

    # show subcommand
    show_parser = subparsers.add_parser(
        "show",
        help="Print the generated code of one entity",
        description="Compile all entity sources and print the code generated for one entity.",
    )
    show_parser.add_argument("entity", help="Name of the entity to show")
    show_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the entity sources (default: current directory)",
    )

    # dump subcommand
    dump_parser = subparsers.add_parser(
        "dump",
        help="Export the resolved entity model as JSON",
        description="Parse and resolve all entity sources and write the model as a JSON artifact.",
    )
    dump_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the entity sources (default: current directory)",
    )
    dump_parser.add_argument("-o", "--output", help="Artifact file to write (default: print to stdout)")

    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "show":
        return _cmd_show(args)
    if args.command == "dump":
        return _cmd_dump(args)
    return 0


def _error(message: str) -> None:
    print(chalk.red(f"Error: {message}"), file=sys.stderr)


def _load_workspace(directory_arg: str) -> tuple[Path, WorkspaceConfig, list[EntitySource]] | None:
    """Resolve the workspace directory, its configuration and its entity sources.

    Prints an error and returns None if the directory or the configuration is unusable.
    """
    directory = Path(directory_arg).resolve()
    if not directory.is_dir():
        _error(f"directory '{directory}' does not exist.")
        return None

    try:
        config = load_workspace_config(directory / CONFIG_FILE_NAME)
    except WorkspaceConfigError as exc:
        _error(str(exc))
        return None

    sources = DirectorySourceProvider(directory, config.source_pattern).get_sources()
    return directory, config, sources


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        _error(f"directory '{directory}' does not exist.")
        return 1

    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        _error(f"workspace already exists at '{config_file}'.")
        return 1

    config = WorkspaceConfig()
    if args.namespace:
        config.default_namespace = args.namespace
    if args.base_class_namespace:
        config.base_class_namespace = args.base_class_namespace

    try:
        save_workspace_config(config, config_file)
    except WorkspaceConfigError as exc:
        _error(str(exc))
        return 1

    print(f"Initialized EFBuilder workspace at '{config_file}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    workspace = _load_workspace(args.directory)
    if workspace is None:
        return 1
    _, _, sources = workspace

    if not sources:
        print("No entity sources found in the workspace.")
        return 0

    print(f"Checking {len(sources)} entity source(s)...")
    _, errors, result = check_sources(sources)

    for warning in result.warnings:
        print(chalk.yellow(f"Warning: {warning.message}"))
    for error in errors + [error.message for error in result.errors]:
        _error(error)

    if errors or result.has_errors:
        return 1

    print(chalk.green("No issues found."))
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    workspace = _load_workspace(args.directory)
    if workspace is None:
        return 1
    directory, config, sources = workspace

    if not sources:
        print("No entity sources found in the workspace.")
        return 0

    try:
        files = compile_sources(sources, config.to_generator_settings())
    except CompilerError as exc:
        for error in exc.errors:
            _error(error)
        return 1

    output_dir = Path(args.output) if args.output else directory / config.output_directory
    try:
        written = write_files(files, output_dir, overwrite=args.overwrite)
    except OSError as exc:
        _error(f"cannot write generated files: {exc}")
        return 1

    skipped = len(files) - len(written)
    print(chalk.green(f"Generated {len(written)} file(s) in '{output_dir}'."))
    if skipped:
        print(chalk.yellow(f"Skipped {skipped} existing file(s); use --overwrite to replace them."))
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    """Handle the show subcommand."""
    workspace = _load_workspace(args.directory)
    if workspace is None:
        return 1
    _, config, sources = workspace

    try:
        files = compile_sources(sources, config.to_generator_settings())
    except CompilerError as exc:
        for error in exc.errors:
            _error(error)
        return 1

    wanted = f"{args.entity}{FILE_EXTENSION}".lower()
    for generated in files:
        if generated.filename.lower() == wanted:
            print(generated.content, end="")
            return 0

    _error(f"entity '{args.entity}' not found.")
    return 1


def _cmd_dump(args: argparse.Namespace) -> int:
    """Handle the dump subcommand."""
    workspace = _load_workspace(args.directory)
    if workspace is None:
        return 1
    _, _, sources = workspace

    entities, errors = parse_entities(sources)
    if errors:
        for error in errors:
            _error(error)
        return 1

    if not args.output:
        print(serialize(entities), end="")
        return 0

    output = Path(args.output)
    try:
        write_artifact(entities, output)
    except OSError as exc:
        _error(f"cannot write artifact: {exc}")
        return 1

    print(f"Wrote {len(entities)} entities to '{output}'.")
    return 0
