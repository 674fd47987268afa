"""
Command line entry point.

    blockgen SCHEMA -o OUTPUT [--config FILE] [--no-format]
             [--formatter CMD] [--dump-model PATH] [--check] [-v]
"""

import argparse
import logging
import sys
from typing import List, Optional

from blockgen.analyzer import analyze_schema, format_report
from blockgen.backends.python_generator import FormattingError
from blockgen.config import ConfigError, GeneratorConfig, load_config
from blockgen.inference import SchemaValidationError
from blockgen.pipeline import run_config
from blockgen.schema_parser import SchemaParseError, parse_schema_file
from blockgen.serialization import model_to_json

logger = logging.getLogger("blockgen")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockgen",
        description="Generate typed Python block definitions from a block schema",
    )
    parser.add_argument("schema", nargs="?", help="Schema file (.json, .yaml, .yml)")
    parser.add_argument("-o", "--output", help="Generated module path")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--no-format", action="store_true", help="Skip the external formatter")
    parser.add_argument("--formatter", help="Formatter command, e.g. 'black -q'")
    parser.add_argument("--dump-model", metavar="PATH", help="Also write the structural model as JSON")
    parser.add_argument("--check", action="store_true", help="Only analyze the schema and print a report")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-block detail")
    return parser


def _resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    config = load_config(args.config) if args.config else GeneratorConfig()
    if args.schema:
        config.input = args.schema
    if args.output:
        config.output = args.output
    if args.no_format:
        config.run_formatter = False
    if args.formatter:
        config.format_command = args.formatter.split()
    if args.verbose:
        config.log_level = "DEBUG"
    return config


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _resolve_config(args)
    except (ConfigError, FileNotFoundError) as e:
        parser.error(str(e))

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )

    if not config.input:
        parser.error("a schema file is required")

    if args.check:
        try:
            schema = parse_schema_file(config.input)
        except (SchemaParseError, FileNotFoundError) as e:
            logger.error("%s", e)
            return 1
        report = analyze_schema(schema)
        print(format_report(report))
        return 0 if report.ok else 1

    if not config.output:
        parser.error("an output path is required (-o/--output)")

    try:
        model = run_config(config, logger=logger)
    except (SchemaParseError, FileNotFoundError) as e:
        logger.error("Cannot read schema: %s", e)
        return 1
    except SchemaValidationError as e:
        logger.error("Invalid schema: %s", e)
        return 1
    except FormattingError as e:
        logger.error("%s", e)
        return 1

    if args.dump_model:
        with open(args.dump_model, 'w', encoding='utf-8') as f:
            f.write(model_to_json(model))
        logger.info("Wrote structural model to %s", args.dump_model)

    return 0


if __name__ == "__main__":
    sys.exit(main())
