"""
objschema CLI — Validate and normalize JSON documents against YAML schemas.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from objschema import __version__
from objschema.core.errors import ObjectSchemaError, ValidationError
from objschema.core.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)
from objschema.core.validator import Validator
from objschema.schema.loader import load_schemas

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_SCHEMA_ERROR = 2

log = get_logger()


def read_input(source: str) -> Any:
    """Read a JSON document from a file path, or stdin for `-`."""
    if source == "-":
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text())


def write_output(data: Any, output: Optional[str]) -> None:
    text = json.dumps(data, indent=2, default=str)
    if output:
        Path(output).write_text(text + "\n")
    else:
        print(text)


def build_validator(schemas_dir: str) -> Validator:
    return Validator(load_schemas(schemas_dir))


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "schema_id",
        type=str,
        help="Id of the schema (file name without extension)",
    )
    parser.add_argument(
        "--schemas",
        type=str,
        required=True,
        help="Directory of YAML schema files (searched recursively)",
    )


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "input",
        type=str,
        nargs="?",
        default="-",
        help="Path to a JSON file (use - for stdin, the default)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="objschema",
        description="Schema-driven validation and normalization of JSON objects",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"objschema {__version__}",
    )

    # Logging configuration
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or OBJSCHEMA_LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (schema,validation,loader,system). Default: all",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a JSON document and print the cleaned result",
    )
    _add_common_arguments(validate_parser)
    _add_input_arguments(validate_parser)
    validate_parser.add_argument(
        "--nullify-empty-values",
        action="store_true",
        help="Turn empty strings failing format/pattern/enum checks into null",
    )
    validate_parser.add_argument(
        "--cleanup-nulls",
        action="store_true",
        help="Drop null-valued attributes before validation",
    )

    # Normalize command
    normalize_parser = subparsers.add_parser(
        "normalize",
        help="Apply defaults and type coercion without validating",
    )
    _add_common_arguments(normalize_parser)
    _add_input_arguments(normalize_parser)

    # Refs command
    refs_parser = subparsers.add_parser(
        "refs",
        help="List the schemas a schema references, transitively",
    )
    _add_common_arguments(refs_parser)

    return parser


def run_validate(args: argparse.Namespace) -> int:
    """Run validate command."""
    validator = build_validator(args.schemas)
    obj = read_input(args.input)

    try:
        result = validator.validate(
            obj,
            args.schema_id,
            should_nullify_empty_values=args.nullify_empty_values,
            should_cleanup_nulls=args.cleanup_nulls,
        )
    except ValidationError as error:
        print(error.to_json(), file=sys.stderr)
        return EXIT_INVALID

    write_output(result, args.output)
    return EXIT_OK


def run_normalize(args: argparse.Namespace) -> int:
    """Run normalize command."""
    validator = build_validator(args.schemas)
    obj = read_input(args.input)

    write_output(validator.normalize(obj, args.schema_id), args.output)
    return EXIT_OK


def run_refs(args: argparse.Namespace) -> int:
    """Run refs command."""
    validator = build_validator(args.schemas)

    for schema_id in validator.get_reference_ids(args.schema_id):
        print(schema_id)
    return EXIT_OK


COMMANDS = {
    "validate": run_validate,
    "normalize": run_normalize,
    "refs": run_refs,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]

    logging.basicConfig(format="%(message)s", stream=sys.stderr, force=True)
    configure_logging(level=args.log_level, channels=channels, force=True)
    bind_request_context(command=args.command, schema_id=args.schema_id)

    try:
        return COMMANDS[args.command](args)
    except (ObjectSchemaError, FileNotFoundError, ValueError) as error:
        log.error("command_failed", error=str(error), error_type=type(error).__name__)
        print(f"Error: {error}", file=sys.stderr)
        return EXIT_SCHEMA_ERROR
    finally:
        clear_request_context()


if __name__ == "__main__":
    sys.exit(main())
