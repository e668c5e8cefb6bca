"""
Command line entry point: validate checklist templates and answers on disk.

    checklist-model validate-template template.yaml
    checklist-model validate-answer template.json answer.json
    checklist-model example [--answer] [--format json|yaml]

Exit status: 0 valid, 1 violations found, 2 input could not be read.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from checklist_model.answer_validator import validate_answer
from checklist_model.errors import (
    ChecklistError,
    ChecklistParseError,
    InvalidTemplateError,
    ValidationReport,
)
from checklist_model.examples import build_example_answer, build_example_template
from checklist_model.logging_setup import configure_logging
from checklist_model.serialization import (
    answer_from_json,
    answer_from_yaml,
    answer_to_json,
    answer_to_yaml,
    template_from_json,
    template_from_yaml,
    template_to_json,
    template_to_yaml,
)
from checklist_model.template_validator import validate_template

logger = logging.getLogger(__name__)

T = TypeVar("T")

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_BAD_INPUT = 2


def _load(path: str, from_json: Callable[[str], T], from_yaml: Callable[[str], T]) -> T:
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        decode = from_json
    elif suffix in (".yaml", ".yml"):
        decode = from_yaml
    else:
        raise ChecklistError(f"{path}: unsupported file type '{suffix}' (use .json, .yaml or .yml)")
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ChecklistParseError(f"{path}: not valid UTF-8 ({e.reason} at byte {e.start})") from e
    logger.debug("Loaded %s (%d bytes)", path, len(text))
    return decode(text)


def _print_report(report: ValidationReport, label: str) -> int:
    if report.is_valid:
        print(f"{label}: valid")
        return EXIT_OK
    print(f"{label}: {len(report.errors)} error(s)")
    for error in report.errors:
        print(f"  {error}")
    return EXIT_INVALID


def _cmd_validate_template(args: argparse.Namespace) -> int:
    template = _load(args.template, template_from_json, template_from_yaml)
    return _print_report(validate_template(template), args.template)


def _cmd_validate_answer(args: argparse.Namespace) -> int:
    template = _load(args.template, template_from_json, template_from_yaml)
    answer = _load(args.answer, answer_from_json, answer_from_yaml)
    try:
        report = validate_answer(template, answer)
    except InvalidTemplateError as e:
        return _print_report(e.report, args.template)
    return _print_report(report, args.answer)


def _cmd_example(args: argparse.Namespace) -> int:
    if args.answer:
        obj = build_example_answer()
        text = answer_to_json(obj) if args.format == "json" else answer_to_yaml(obj)
    else:
        obj = build_example_template()
        text = template_to_json(obj) if args.format == "json" else template_to_yaml(obj)
    print(text)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="checklist-model",
        description="Validate checklist templates and answers",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $CHECKLIST_MODEL_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("validate-template", help="Check a template's structure")
    p.add_argument("template", help="Template file (.json, .yaml, .yml)")
    p.set_defaults(func=_cmd_validate_template)

    p = sub.add_parser("validate-answer", help="Check an answer against its template")
    p.add_argument("template", help="Template file (.json, .yaml, .yml)")
    p.add_argument("answer", help="Answer file (.json, .yaml, .yml)")
    p.set_defaults(func=_cmd_validate_answer)

    p = sub.add_parser("example", help="Print the example template (or answer)")
    p.add_argument("--answer", action="store_true", help="Print the example answer instead")
    p.add_argument("--format", choices=["yaml", "json"], default="yaml")
    p.set_defaults(func=_cmd_example)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configure_logging(args.log_level)
    except ValueError as e:
        parser.error(str(e))

    try:
        return args.func(args)
    except (OSError, ChecklistError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT


if __name__ == "__main__":
    sys.exit(main())
