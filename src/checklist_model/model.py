"""
Core Checklist Model Objects

Defines the data structures of a checklist template and a checklist answer.

Two parts:
    1. Checklist Template - authored once by the checklist creator (admin)
    2. Checklist Answer   - submitted by a surveyor (field worker)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about rendering, PDF export or analytics
        - Are immutable (frozen dataclasses, tuples instead of lists)
        - Are fully serializable
        - Represent structure, not behavior

    Tagged unions (Question, PageElement, AnswerValue) are plain dataclasses
    carrying an explicit `kind` discriminant. They do NOT share a base class.
    Dispatch on them goes through `checklist_model.classify`.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Tuple, Union


class ElementKind(Enum):
    """
    Discriminant of a page element.

    The value is the `type` field used by the survey-form library.
    """

    RADIOGROUP = "radiogroup"
    CHECKBOX = "checkbox"
    PANEL = "panel"


# =============================================================================
# TEMPLATE
# =============================================================================


@dataclass(frozen=True)
class Choice:
    """
    A selectable option in a question.

    Properties:
        value: The token stored in the answer (e.g., "Item 1")
        text: The display text shown to the user (e.g., "Yes")

    `value` must be unique within its question. That is checked by the
    template validator, not here.
    """

    value: str
    text: str


@dataclass(frozen=True)
class RadioGroupQuestion:
    """
    Single selection question.

    The surveyor picks exactly one of `choices`. If `show_other_item` is set,
    the renderer adds an "Other" option storing the `"other"` sentinel and a
    free-text comment under the derived comment key.

    Properties:
        name: Unique question ID, used as key in the answer
        title: Question text shown to the user
        description: Additional instructions
        is_required: Must be answered before submit
        choices: Available options
        show_other_item: Optional "Other" option (None means absent)
    """

    name: str
    title: str = ""
    description: str = ""
    is_required: bool = False
    choices: Tuple[Choice, ...] = ()
    show_other_item: Optional[bool] = None
    kind: ElementKind = ElementKind.RADIOGROUP


@dataclass(frozen=True)
class CheckboxQuestion:
    """
    Multiple selection question.

    Same as RadioGroupQuestion, plus `show_image_upload`, which allows
    images to be attached under the derived image key.
    """

    name: str
    title: str = ""
    description: str = ""
    is_required: bool = False
    choices: Tuple[Choice, ...] = ()
    show_other_item: Optional[bool] = None
    show_image_upload: Optional[bool] = None
    kind: ElementKind = ElementKind.CHECKBOX


Question = Union[RadioGroupQuestion, CheckboxQuestion]


@dataclass(frozen=True)
class PanelElement:
    """
    Container grouping related questions on a page.

    NOTE:
        Panels may only contain RadioGroup or Checkbox questions.
        Nested panels are NOT allowed (containment depth is exactly one
        below the page). The template validator reports violations.
    """

    name: str
    title: str = ""
    description: str = ""
    elements: Tuple[Question, ...] = ()
    kind: ElementKind = ElementKind.PANEL


@dataclass(frozen=True)
class UnknownElement:
    """
    An element whose `type` is not one this model knows.

    Decoders produce it instead of failing so the template validator can
    report UnknownElementKind alongside every other violation. `kind` holds
    the raw discriminant as found in the document (possibly None).
    classify() raises on it.
    """

    name: str
    kind: Any = None
    title: str = ""
    description: str = ""


PageElement = Union[RadioGroupQuestion, CheckboxQuestion, PanelElement, UnknownElement]


@dataclass(frozen=True)
class ChecklistPage:
    """A page of the checklist. `name` is unique within the template."""

    name: str
    elements: Tuple[PageElement, ...] = ()


def _join(*parts: str) -> str:
    return "/".join(parts)


def _kind_or_none(element: object) -> Optional[ElementKind]:
    # Imported here: classify depends on this module.
    from checklist_model.classify import classify
    from checklist_model.errors import UnknownElementKindError

    try:
        return classify(element)
    except UnknownElementKindError:
        return None


@dataclass(frozen=True)
class ChecklistTemplate:
    """
    Root container for a checklist definition.

    Created by the checklist creator, used by surveyors as the form to fill
    out. Once published it is not changed in place; an update produces a new
    template value. Template identity (`id`) is opaque.

    Properties:
        id: Unique template ID
        title: Template title
        description: Template description
        pages: Pages in display order

    INVARIANTS (checked by validate_template, not on construction):
        - At least one page, and every page has at least one element
        - Element names are unique across the whole template, including
          their derived answer keys
        - Panels contain only questions
        - Every question has at least one choice, with unique values
    """

    id: str
    title: str = ""
    description: str = ""
    pages: Tuple[ChecklistPage, ...] = ()

    def iter_elements(self) -> Iterator[Tuple[str, PageElement]]:
        """
        Yield `(path, element)` for every element in document order.

        Panel children follow their panel. Paths are slash-joined names,
        e.g. "page1/panel1/question3".

        Elements of unknown kind are yielded too; they have no children.
        """
        for page in self.pages:
            for element in page.elements:
                path = _join(page.name, element.name)
                yield path, element
                if _kind_or_none(element) is ElementKind.PANEL:
                    for child in element.elements:
                        yield _join(path, child.name), child

    def iter_questions(self) -> Iterator[Tuple[str, Question]]:
        """Yield `(path, question)` for every question, page level and inside panels."""
        for path, element in self.iter_elements():
            if _kind_or_none(element) in (ElementKind.RADIOGROUP, ElementKind.CHECKBOX):
                yield path, element

    def get_question(self, name: str) -> Optional[Question]:
        """
        Retrieve a question by name.

        Args:
            name: Question name

        Returns:
            The first question with that name, or None if not found
        """
        for _, question in self.iter_questions():
            if question.name == name:
                return question
        return None

    def get_page(self, name: str) -> Optional[ChecklistPage]:
        for page in self.pages:
            if page.name == name:
                return page
        return None


# =============================================================================
# ANSWER
# =============================================================================


@dataclass(frozen=True)
class AnswerImage:
    """
    An uploaded image attachment.

    Properties:
        name: Original filename (e.g., "photo.png")
        type: MIME type (e.g., "image/png")
        content: Base64 payload, optionally as a data URL
            ("data:image/png;base64,....")
    """

    name: str
    type: str
    content: str


class ValueKind(Enum):
    """Discriminant of a dynamic answer value."""

    STRING = "string"
    STRING_ARRAY = "string_array"
    IMAGE_ARRAY = "image_array"


@dataclass(frozen=True)
class StringValue:
    """RadioGroup selection, or the free text stored under a comment key."""

    value: str
    kind: ValueKind = ValueKind.STRING


@dataclass(frozen=True)
class StringArrayValue:
    """Checkbox selections."""

    values: Tuple[str, ...] = ()
    kind: ValueKind = ValueKind.STRING_ARRAY


@dataclass(frozen=True)
class ImageArrayValue:
    """Images attached under an image key."""

    images: Tuple[AnswerImage, ...] = ()
    kind: ValueKind = ValueKind.IMAGE_ARRAY


AnswerValue = Union[StringValue, StringArrayValue, ImageArrayValue]


@dataclass(frozen=True)
class ChecklistAnswer:
    """
    A submitted answer instance.

    Fixed fields:
        id: Unique answer ID
        checklist_id: Reference to the template ID. Non-owning: deleting
            the template does not invalidate the answer.

    Dynamic fields (`fields`), keyed by question name:

        | Key                | Value            | Meaning                    |
        |--------------------|------------------|----------------------------|
        | {name}             | StringValue      | RadioGroup answer          |
        | {name}             | StringArrayValue | Checkbox answer            |
        | {name}-Comment     | StringValue      | Comment for "other"        |
        | {name}-Image       | ImageArrayValue  | Uploaded images            |

    Key order is preserved. `fields` is copied into a read-only mapping on
    construction, so the answer is hashable and cannot be changed in place.
    """

    id: str
    checklist_id: str
    fields: Mapping[str, AnswerValue] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __hash__(self) -> int:
        return hash((self.id, self.checklist_id, tuple(self.fields.items())))

    def get(self, key: str) -> Optional[AnswerValue]:
        return self.fields.get(key)

    def keys(self) -> Tuple[str, ...]:
        return tuple(self.fields.keys())
