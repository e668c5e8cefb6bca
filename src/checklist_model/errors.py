"""
Error taxonomy for checklist validation.

Two kinds of failure exist and they are kept apart:

    - Validation errors: recoverable, reported conditions about a template
      or an answer. They are returned as data (ValidationError records in a
      ValidationReport) so a UI can show every violation at once.

    - Exceptions: raised only for bad input documents or programmer errors
      (an unclassifiable element, an unparsable file, validating an answer
      against a broken template).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


class ErrorCode(Enum):
    """Codes reported by the validators."""

    UNKNOWN_ELEMENT_KIND = "UnknownElementKind"
    DUPLICATE_NAME = "DuplicateName"
    EMPTY_CHOICES = "EmptyChoices"
    NESTED_PANEL = "NestedPanel"
    DUPLICATE_CHOICE_VALUE = "DuplicateChoiceValue"
    EMPTY_TEMPLATE = "EmptyTemplate"
    MISSING_REQUIRED_ANSWER = "MissingRequiredAnswer"
    INVALID_CHOICE_VALUE = "InvalidChoiceValue"
    OTHER_WITHOUT_COMMENT = "OtherWithoutComment"
    UNEXPECTED_IMAGE_UPLOAD = "UnexpectedImageUpload"
    INVALID_IMAGE_ENCODING = "InvalidImageEncoding"
    ORPHAN_ANSWER_KEY = "OrphanAnswerKey"


@dataclass(frozen=True)
class ValidationError:
    """
    A single violation.

    Properties:
        path: Where the violation is.
            Template errors: slash-joined names ("page1/panel1/q3").
            Answer errors: the answer key ("q3", "q3-Image[0]").
        code: ErrorCode
        message: Human-readable detail (not part of equality)
    """

    path: str
    code: ErrorCode
    message: str = field(default="", compare=False)

    def __str__(self) -> str:
        text = f"{self.code.value} {self.path}"
        if self.message:
            text += f": {self.message}"
        return text


@dataclass
class ValidationReport:
    """Ordered collection of violations. An empty report means valid."""

    errors: List[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, path: str, code: ErrorCode, message: str = "") -> None:
        self.errors.append(ValidationError(path=path, code=code, message=message))

    def codes(self) -> List[ErrorCode]:
        return [e.code for e in self.errors]

    def at(self, path: str) -> List[ValidationError]:
        """All errors reported at `path`."""
        return [e for e in self.errors if e.path == path]

    def pairs(self) -> List[Tuple[ErrorCode, str]]:
        return [(e.code, e.path) for e in self.errors]


class ChecklistError(Exception):
    """Base class for checklist exceptions."""
    pass


class UnknownElementKindError(ChecklistError):
    """Raised when an element's discriminant is missing or not a known kind."""

    code = ErrorCode.UNKNOWN_ELEMENT_KIND

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unknown element kind: {kind!r}")


class ChecklistParseError(ChecklistError):
    """Raised when a template or answer document cannot be decoded."""
    pass


class InvalidTemplateError(ChecklistError):
    """Raised when an answer is validated against a template that is not valid."""

    def __init__(self, report: ValidationReport):
        self.report = report
        details = "; ".join(str(e) for e in report.errors)
        super().__init__(f"Template failed validation: {details}")
