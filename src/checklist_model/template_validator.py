"""
Template Validator: structural checks for ChecklistTemplate objects.

Checks for:
    - Empty templates and empty pages
    - Duplicate names (pages, elements, and element names colliding with
      another question's derived answer keys)
    - Questions without choices, or with repeated choice values
    - Panels nested inside panels
    - Elements whose kind cannot be classified

IMPORTANT: This is a read-only traversal. It does NOT modify the template.
Every element is visited once, in document order, and every violation is
collected; nothing fails fast.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Set

from checklist_model.classify import classify
from checklist_model.errors import ErrorCode, UnknownElementKindError, ValidationReport
from checklist_model.keys import derived_keys
from checklist_model.model import ChecklistTemplate, ElementKind, Question

logger = logging.getLogger(__name__)


def _join(*parts: str) -> str:
    return "/".join(parts)


def _kind_or_report(element: object, path: str, report: ValidationReport) -> Optional[ElementKind]:
    try:
        return classify(element)
    except UnknownElementKindError as exc:
        report.add(path, exc.code, str(exc))
        return None


def _claim_names(element: object, kind: ElementKind, path: str,
                 claimed: Dict[str, str], report: ValidationReport) -> None:
    """
    Register the answer keys an element owns.

    A question owns its name plus both derived keys; a panel owns its name
    only. Any overlap with an earlier claim is one DuplicateName at `path`.
    """
    name = element.name
    keys = (name,) if kind is ElementKind.PANEL else derived_keys(name)

    clashes = [k for k in keys if k in claimed]
    if clashes:
        first = clashes[0]
        report.add(
            path,
            ErrorCode.DUPLICATE_NAME,
            f"'{first}' already used by {claimed[first]}",
        )
    for key in keys:
        claimed.setdefault(key, path)


def _check_choices(question: Question, path: str, report: ValidationReport) -> None:
    if not question.choices:
        report.add(path, ErrorCode.EMPTY_CHOICES, "question has no choices")
        return

    seen: Set[str] = set()
    reported: Set[str] = set()
    for choice in question.choices:
        if choice.value in seen and choice.value not in reported:
            report.add(
                path,
                ErrorCode.DUPLICATE_CHOICE_VALUE,
                f"choice value '{choice.value}' appears more than once",
            )
            reported.add(choice.value)
        seen.add(choice.value)


def validate_template(template: ChecklistTemplate) -> ValidationReport:
    """
    Validate the structure of a checklist template.

    Paths are slash-joined names: "page", "page/element" or
    "page/panel/question". Template-level problems use the empty path.

    Returns a ValidationReport; an empty report means the template is valid.
    Calling it twice on the same template yields the same ordered errors.
    """
    report = ValidationReport()

    if not template.pages:
        report.add("", ErrorCode.EMPTY_TEMPLATE, "template has no pages")

    page_names: Set[str] = set()
    # answer key -> path of the element that claimed it first
    claimed: Dict[str, str] = {}

    for page in template.pages:
        if page.name in page_names:
            report.add(page.name, ErrorCode.DUPLICATE_NAME, f"page name '{page.name}' is not unique")
        page_names.add(page.name)

        if not page.elements:
            report.add(page.name, ErrorCode.EMPTY_TEMPLATE, "page has no elements")

        for element in page.elements:
            path = _join(page.name, getattr(element, "name", ""))
            kind = _kind_or_report(element, path, report)
            if kind is None:
                continue

            _claim_names(element, kind, path, claimed, report)

            if kind is not ElementKind.PANEL:
                _check_choices(element, path, report)
                continue

            for child in element.elements:
                child_path = _join(path, getattr(child, "name", ""))
                child_kind = _kind_or_report(child, child_path, report)
                if child_kind is None:
                    continue

                _claim_names(child, child_kind, child_path, claimed, report)

                if child_kind is ElementKind.PANEL:
                    # Not descended into: containment stops one level below the page.
                    report.add(child_path, ErrorCode.NESTED_PANEL, "panels cannot contain panels")
                    continue

                _check_choices(child, child_path, report)

    logger.debug("Validated template %r: %d error(s)", template.id, len(report.errors))
    return report
