import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from common.errors import SchemaDesignerError
from ddl import ParseMode, parse_sql_with_report
from schema import Schema
from sqlgen import (
    DIALECT_ALIASES,
    convert_sql,
    generate_schema_sql,
    generate_system_prompt,
    validate_sql,
)

from .migrations import plan_migration

logger = logging.getLogger(__name__)


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _add_dialect_argument(parser: argparse.ArgumentParser, flag: str = "--dialect") -> None:
    parser.add_argument(
        flag,
        default=None,
        help=(
            "SQL dialect or alias (e.g. "
            + ", ".join(sorted(DIALECT_ALIASES))
            + "; default: SCHEMA_DESIGNER_DEFAULT_DIALECT or postgresql)"
        ),
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the schema designer CLI."""
    parser = argparse.ArgumentParser(description="Schema Designer CLI")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse Command
    parse_parser = subparsers.add_parser("parse", help="Parse CREATE TABLE SQL into JSON")
    parse_parser.add_argument("input", nargs="?", default="-", help="SQL file (default: stdin)")
    _add_dialect_argument(parse_parser)
    parse_parser.add_argument(
        "--strict", action="store_true", help="Fail on statements that cannot be modeled"
    )
    parse_parser.add_argument(
        "--report", action="store_true", help="Include parse issues in the output"
    )

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Render a JSON schema as SQL")
    gen_parser.add_argument("input", nargs="?", default="-", help="JSON file (default: stdin)")
    _add_dialect_argument(gen_parser)

    # Convert Command
    conv_parser = subparsers.add_parser("convert", help="Convert SQL between dialects")
    conv_parser.add_argument("input", nargs="?", default="-", help="SQL file (default: stdin)")
    _add_dialect_argument(conv_parser, "--from")
    _add_dialect_argument(conv_parser, "--to")

    # Validate Command
    val_parser = subparsers.add_parser("validate", help="Check SQL for dialect mistakes")
    val_parser.add_argument("input", nargs="?", default="-", help="SQL file (default: stdin)")
    _add_dialect_argument(val_parser)

    # Prompt Command
    prompt_parser = subparsers.add_parser("prompt", help="Print the AI system prompt")
    _add_dialect_argument(prompt_parser)

    # Migrate Command
    mig_parser = subparsers.add_parser("migrate", help="Plan a migration between two SQL files")
    mig_parser.add_argument("previous", help="Previous SQL file")
    mig_parser.add_argument("current", help="Current SQL file")
    mig_parser.add_argument("--name", default=None, help="Migration name")
    _add_dialect_argument(mig_parser)

    return parser


def _run(args: argparse.Namespace) -> int:
    if args.command == "parse":
        mode = ParseMode.STRICT if args.strict else None
        report = parse_sql_with_report(_read_input(args.input), dialect=args.dialect, mode=mode)
        payload = report.schema.to_dict()
        if args.report:
            payload = {
                "schema": payload,
                "issues": [
                    {
                        "code": issue.code.value,
                        "severity": issue.severity.value,
                        "message": issue.message,
                        "table": issue.table,
                    }
                    for issue in report.issues
                ],
            }
        print(json.dumps(payload, indent=2))
    elif args.command == "generate":
        schema = Schema.from_dict(json.loads(_read_input(args.input)))
        print(generate_schema_sql(schema, args.dialect))
    elif args.command == "convert":
        print(convert_sql(_read_input(args.input), getattr(args, "from"), args.to))
    elif args.command == "validate":
        result = validate_sql(_read_input(args.input), args.dialect)
        print(result.model_dump_json(indent=2))
        if not result.valid:
            return 1
    elif args.command == "prompt":
        print(generate_system_prompt(args.dialect))
    elif args.command == "migrate":
        migration = plan_migration(
            _read_input(args.previous),
            _read_input(args.current),
            name=args.name,
            dialect=args.dialect,
        )
        if migration is None:
            logger.info("Schemas are identical; no migration needed")
        else:
            print(migration.model_dump_json(indent=2, by_alias=True))
    return 0


def main(argv=None):
    """Run the schema designer CLI."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        return

    try:
        code = _run(args)
    except (SchemaDesignerError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)
    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
