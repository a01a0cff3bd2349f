"""Command line entry point.

Render a form config to HTML, or validate a record against a rules file.
Both JSON and YAML documents are accepted.

Run with: unival render form.yaml [--options opts.yaml] [--basic]
          unival validate rules.yaml data.json
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from unival.core.config import get_settings
from unival.core.errors import AppErrorException
from unival.core.logging import bind_context, clear_context, cli_logger, configure_logging
from unival.forms import FormSchemaBuilder, HtmlAdapter, render_basic_form
from unival.validation import validate

log = cli_logger()

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def load_document(path: str | Path) -> Any:
    """Load a JSON or YAML file. ``.json`` files are parsed as JSON, the rest as YAML."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def _split_config(document: Any) -> tuple[Any, dict]:
    """A render document is a field list, or a mapping with ``fields`` and ``options``."""
    if isinstance(document, dict) and "fields" in document:
        return document["fields"], document.get("options") or {}
    return document, {}


def cmd_render(args: argparse.Namespace) -> int:
    config, options = _split_config(load_document(args.config))
    if args.options:
        options = {**options, **(load_document(args.options) or {})}

    if args.basic:
        schema, resolved = FormSchemaBuilder.build(config, options)
        markup = render_basic_form(schema, resolved)
    else:
        markup = FormSchemaBuilder.generate(config, HtmlAdapter(), options)

    print(markup)
    return EXIT_OK


def cmd_validate(args: argparse.Namespace) -> int:
    rules = load_document(args.rules) or {}
    data = load_document(args.data) or {}
    if not isinstance(rules, dict) or not isinstance(data, dict):
        print("error: rules and data must both be mappings", file=sys.stderr)
        return EXIT_USAGE

    result = asyncio.run(validate(data, rules))
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return EXIT_OK if result.is_valid else EXIT_INVALID


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unival",
        description="Declarative field validation and form rendering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  unival render signup.yaml                       # HTML form on stdout
  unival render signup.yaml --options opts.json   # Override form/submit/classes
  unival render signup.yaml --basic               # Minimal built-in markup
  unival validate rules.yaml record.json          # Exit 1 when invalid
        """
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: from settings)")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON logs and errors on stderr")

    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a field config as an HTML form")
    render.add_argument("config", help="Field config list (JSON or YAML)")
    render.add_argument("--options", help="Render options file (JSON or YAML)")
    render.add_argument("--basic", action="store_true", help="Use the minimal built-in renderer")
    render.set_defaults(handler=cmd_render)

    check = sub.add_parser("validate", help="Validate a record against per-field rules")
    check.add_argument("rules", help="Mapping of field name to rule (JSON or YAML)")
    check.add_argument("data", help="Record to validate (JSON or YAML)")
    check.set_defaults(handler=cmd_validate)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    json_logs = args.json_logs or settings.LOG_JSON
    configure_logging(args.log_level or settings.LOG_LEVEL, json_logs)
    bind_context(command=args.command)

    try:
        return args.handler(args)
    except AppErrorException as exc:
        log.debug("command_failed", error_id=exc.error.error_id)
        if json_logs:
            print(json.dumps(exc.error.to_dict()), file=sys.stderr)
        else:
            print(f"error: {exc.error}", file=sys.stderr)
        return EXIT_USAGE
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    finally:
        clear_context()


if __name__ == "__main__":
    sys.exit(main())
