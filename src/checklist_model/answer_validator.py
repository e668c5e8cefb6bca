"""
Answer Validator: checks a ChecklistAnswer against its ChecklistTemplate.

Checks for:
    - Required questions without an answer
    - Selections that are not one of the question's choice values
    - "other" selected without a comment
    - Images on questions that do not accept them, or badly encoded images
    - Answer keys that belong to no question

PRECONDITION: the template is structurally valid. An answer cannot be
judged against a broken template, so that case raises InvalidTemplateError
instead of being reported.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from typing import List, Optional, Set

from checklist_model.classify import classify
from checklist_model.errors import ErrorCode, InvalidTemplateError, ValidationReport
from checklist_model.keys import OTHER_VALUE, comment_key, derived_keys, image_key
from checklist_model.model import (
    AnswerImage,
    AnswerValue,
    ChecklistAnswer,
    ChecklistTemplate,
    ElementKind,
    Question,
    ValueKind,
)
from checklist_model.template_validator import validate_template

logger = logging.getLogger(__name__)

_TOKEN = r"[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*"
_MIME_RE = re.compile(rf"^{_TOKEN}/{_TOKEN}$")
_DATA_URL_PREFIX = "data:"


def _is_empty(value: Optional[AnswerValue]) -> bool:
    if value is None:
        return True
    if value.kind is ValueKind.STRING:
        return value.value == ""
    if value.kind is ValueKind.STRING_ARRAY:
        return not value.values
    return not value.images


def _selections(question: Question, kind: ElementKind, value: AnswerValue,
                report: ValidationReport) -> Optional[List[str]]:
    """Selected tokens, or None (reported) when the value has the wrong shape."""
    if kind is ElementKind.RADIOGROUP:
        if value.kind is ValueKind.STRING:
            return [value.value]
        report.add(question.name, ErrorCode.INVALID_CHOICE_VALUE, "expected a single selection")
        return None

    if value.kind is ValueKind.STRING_ARRAY:
        return list(value.values)
    report.add(question.name, ErrorCode.INVALID_CHOICE_VALUE, "expected a list of selections")
    return None


def _check_selection(question: Question, kind: ElementKind, answer: ChecklistAnswer,
                     report: ValidationReport) -> None:
    name = question.name
    value = answer.get(name)

    if _is_empty(value):
        if question.is_required:
            report.add(name, ErrorCode.MISSING_REQUIRED_ANSWER, "required question has no answer")
        return

    selected = _selections(question, kind, value, report)
    if selected is None:
        return

    allowed = {choice.value for choice in question.choices}
    has_other = False
    for token in selected:
        if token == OTHER_VALUE:
            has_other = True
        elif token not in allowed:
            report.add(name, ErrorCode.INVALID_CHOICE_VALUE, f"'{token}' is not a choice value")

    # Once per answer, however many times "other" appears.
    if has_other:
        comment = answer.get(comment_key(name))
        if comment is None or comment.kind is not ValueKind.STRING or not comment.value:
            report.add(
                name,
                ErrorCode.OTHER_WITHOUT_COMMENT,
                f"'{OTHER_VALUE}' selected but '{comment_key(name)}' is empty",
            )


def image_problem(image: AnswerImage) -> Optional[str]:
    """
    Describe what is wrong with an image's encoding, or return None.

    Only syntax is checked: a well-formed MIME type, and content that is
    strict base64 (optionally a base64 data URL whose MIME type matches the
    declared one). Whether the bytes are a real image is not checked.
    """
    if not _MIME_RE.match(image.type or ""):
        return f"malformed MIME type '{image.type}'"

    payload = image.content or ""
    if payload.startswith(_DATA_URL_PREFIX):
        header, sep, payload = payload[len(_DATA_URL_PREFIX):].partition(",")
        if not sep:
            return "data URL has no payload"
        params = header.split(";")
        if params[-1].lower() != "base64":
            return "data URL is not base64 encoded"
        if params[0].lower() != image.type.lower():
            return f"data URL type '{params[0]}' does not match '{image.type}'"

    if not payload:
        return "content is empty"
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return "content is not valid base64"
    return None


def _check_images(question: Question, kind: ElementKind, answer: ChecklistAnswer,
                  report: ValidationReport) -> None:
    key = image_key(question.name)
    value = answer.get(key)
    if _is_empty(value):
        return

    accepts = kind is ElementKind.CHECKBOX and bool(question.show_image_upload)
    if not accepts:
        report.add(key, ErrorCode.UNEXPECTED_IMAGE_UPLOAD, "question does not accept images")
        return

    if value.kind is not ValueKind.IMAGE_ARRAY:
        report.add(key, ErrorCode.INVALID_IMAGE_ENCODING, "expected a list of images")
        return

    for index, image in enumerate(value.images):
        problem = image_problem(image)
        if problem:
            report.add(f"{key}[{index}]", ErrorCode.INVALID_IMAGE_ENCODING, problem)


def validate_answer(template: ChecklistTemplate, answer: ChecklistAnswer) -> ValidationReport:
    """
    Validate an answer against the template it was filled from.

    Errors are reported per question in template order, then orphan keys
    in answer key order. Paths are answer keys.

    Raises:
        InvalidTemplateError: the template itself fails validate_template
    """
    template_report = validate_template(template)
    if not template_report.is_valid:
        raise InvalidTemplateError(template_report)

    if answer.checklist_id != template.id:
        logger.warning(
            "Answer %r references checklist %r but is validated against %r",
            answer.id, answer.checklist_id, template.id,
        )

    report = ValidationReport()
    known: Set[str] = set()

    for _, question in template.iter_questions():
        kind = classify(question)
        known.update(derived_keys(question.name))
        _check_selection(question, kind, answer, report)
        _check_images(question, kind, answer, report)

    for key in answer.keys():
        if key not in known:
            report.add(key, ErrorCode.ORPHAN_ANSWER_KEY, "no question owns this key")

    logger.debug("Validated answer %r: %d error(s)", answer.id, len(report.errors))
    return report
