"""
Serialization helpers for checklist templates and answers.

Provides lossless JSON/YAML round-trip via an intermediate dict
representation. Field names are the camelCase names the survey-form
library reads and writes (`type`, `isRequired`, `showOtherItem`,
`checklistId`, ...). This module keeps that structure stable and explicit.

Decoding checks field types but not structure: nested panels and unknown
element types are decoded as-is and left to the template validator.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

import yaml

from checklist_model.classify import classify
from checklist_model.errors import ChecklistParseError, UnknownElementKindError
from checklist_model.model import (
    AnswerImage,
    AnswerValue,
    CheckboxQuestion,
    ChecklistAnswer,
    ChecklistPage,
    ChecklistTemplate,
    Choice,
    ElementKind,
    ImageArrayValue,
    PageElement,
    PanelElement,
    RadioGroupQuestion,
    StringArrayValue,
    StringValue,
    UnknownElement,
    ValueKind,
)

_FIXED_ANSWER_FIELDS = ("id", "checklistId")


def _require(d: Any, key: str, what: str) -> Any:
    if not isinstance(d, Mapping):
        raise ChecklistParseError(f"{what} must be a mapping, got {type(d).__name__}")
    if key not in d:
        raise ChecklistParseError(f"{what} is missing '{key}'")
    return d[key]


def _str(d: Any, key: str, what: str, default: Optional[str] = None) -> str:
    """String field `key`; required unless a default is given."""
    if default is not None and isinstance(d, Mapping) and key not in d:
        return default
    value = _require(d, key, what)
    if not isinstance(value, str):
        raise ChecklistParseError(
            f"{what}.{key} must be a string, got {type(value).__name__}"
        )
    return value


def _flag(d: Mapping[str, Any], key: str, what: str) -> Optional[bool]:
    value = d.get(key)
    if value is not None and not isinstance(value, bool):
        raise ChecklistParseError(f"{what}.{key} must be true or false")
    return value


def _list(d: Mapping[str, Any], key: str, what: str) -> List[Any]:
    value = d.get(key, [])
    if value is None:
        return []
    if not isinstance(value, list):
        raise ChecklistParseError(f"{what}.{key} must be a list")
    return value


# =============================================================================
# TEMPLATE
# =============================================================================


def choice_to_dict(c: Choice) -> Dict[str, Any]:
    return {"value": c.value, "text": c.text}


def choice_from_dict(d: Dict[str, Any]) -> Choice:
    value = _str(d, "value", "choice")
    return Choice(value=value, text=_str(d, "text", "choice", default=value))


def element_to_dict(e: PageElement) -> Dict[str, Any]:
    try:
        kind = classify(e)
    except UnknownElementKindError:
        out = {"name": e.name, "title": e.title, "description": e.description}
        if e.kind is not None:
            out = {"type": e.kind, **out}
        return out

    out: Dict[str, Any] = {
        "type": kind.value,
        "name": e.name,
        "title": e.title,
        "description": e.description,
    }
    if kind is ElementKind.PANEL:
        out["elements"] = [element_to_dict(child) for child in e.elements]
        return out

    out["isRequired"] = e.is_required
    out["choices"] = [choice_to_dict(c) for c in e.choices]
    if e.show_other_item is not None:
        out["showOtherItem"] = e.show_other_item
    if kind is ElementKind.CHECKBOX and e.show_image_upload is not None:
        out["showImageUpload"] = e.show_image_upload
    return out


def element_from_dict(d: Dict[str, Any]) -> PageElement:
    """
    Build a page element from its dict form.

    An unknown or missing `type` gives an UnknownElement carrying the raw
    value, which validate_template reports as UnknownElementKind.

    Raises:
        ChecklistParseError: a field has the wrong type
    """
    name = _str(d, "name", "element")
    title = _str(d, "title", name, default="")
    description = _str(d, "description", name, default="")

    raw_kind = d.get("type")
    try:
        kind = ElementKind(raw_kind)
    except ValueError:
        return UnknownElement(name=name, kind=raw_kind, title=title, description=description)

    if kind is ElementKind.PANEL:
        return PanelElement(
            name=name,
            title=title,
            description=description,
            elements=tuple(element_from_dict(c) for c in _list(d, "elements", name)),
        )

    choices = tuple(choice_from_dict(c) for c in _list(d, "choices", name))
    is_required = bool(_flag(d, "isRequired", name))
    if kind is ElementKind.RADIOGROUP:
        return RadioGroupQuestion(
            name=name,
            title=title,
            description=description,
            is_required=is_required,
            choices=choices,
            show_other_item=_flag(d, "showOtherItem", name),
        )
    return CheckboxQuestion(
        name=name,
        title=title,
        description=description,
        is_required=is_required,
        choices=choices,
        show_other_item=_flag(d, "showOtherItem", name),
        show_image_upload=_flag(d, "showImageUpload", name),
    )


def page_to_dict(p: ChecklistPage) -> Dict[str, Any]:
    return {"name": p.name, "elements": [element_to_dict(e) for e in p.elements]}


def page_from_dict(d: Dict[str, Any]) -> ChecklistPage:
    name = _str(d, "name", "page")
    return ChecklistPage(
        name=name,
        elements=tuple(element_from_dict(e) for e in _list(d, "elements", name)),
    )


def template_to_dict(t: ChecklistTemplate) -> Dict[str, Any]:
    return {
        "id": t.id,
        "title": t.title,
        "description": t.description,
        "pages": [page_to_dict(p) for p in t.pages],
    }


def template_from_dict(d: Dict[str, Any]) -> ChecklistTemplate:
    return ChecklistTemplate(
        id=_str(d, "id", "template"),
        title=_str(d, "title", "template", default=""),
        description=_str(d, "description", "template", default=""),
        pages=tuple(page_from_dict(p) for p in _list(d, "pages", "template")),
    )


# =============================================================================
# ANSWER
# =============================================================================


def image_to_dict(i: AnswerImage) -> Dict[str, Any]:
    return {"name": i.name, "type": i.type, "content": i.content}


def image_from_dict(d: Dict[str, Any]) -> AnswerImage:
    return AnswerImage(
        name=_str(d, "name", "image"),
        type=_str(d, "type", "image"),
        content=_str(d, "content", "image"),
    )


def value_to_data(v: AnswerValue) -> Any:
    if v.kind is ValueKind.STRING:
        return v.value
    if v.kind is ValueKind.STRING_ARRAY:
        return list(v.values)
    if v.kind is ValueKind.IMAGE_ARRAY:
        return [image_to_dict(i) for i in v.images]
    raise TypeError(f"Unsupported answer value: {v!r}")


def value_from_data(key: str, data: Any) -> AnswerValue:
    """
    Infer the tagged value for a raw answer field from its shape.

    A string is a single value, a list of strings holds checkbox selections
    and a non-empty list of mappings holds images. The key name plays no
    part: a question may itself be called "x-Image". An empty list decodes
    as an empty selection; the validators treat it as absent either way.
    """
    if isinstance(data, str):
        return StringValue(data)
    if isinstance(data, list):
        if all(isinstance(x, str) for x in data):
            return StringArrayValue(tuple(data))
        if all(isinstance(x, Mapping) for x in data):
            return ImageArrayValue(tuple(image_from_dict(x) for x in data))
        raise ChecklistParseError(
            f"answer field '{key}' must be a list of strings or a list of images"
        )
    raise ChecklistParseError(
        f"answer field '{key}' has unsupported type {type(data).__name__}"
    )


def answer_to_dict(a: ChecklistAnswer) -> Dict[str, Any]:
    out: Dict[str, Any] = {"id": a.id, "checklistId": a.checklist_id}
    for key, value in a.fields.items():
        out[key] = value_to_data(value)
    return out


def answer_from_dict(d: Dict[str, Any]) -> ChecklistAnswer:
    answer_id = _str(d, "id", "answer")
    checklist_id = _str(d, "checklistId", "answer")
    fields = {}
    for key, data in d.items():
        if key in _FIXED_ANSWER_FIELDS or data is None:
            continue
        if not isinstance(key, str):
            raise ChecklistParseError(f"answer key {key!r} must be a string")
        fields[key] = value_from_data(key, data)
    return ChecklistAnswer(id=answer_id, checklist_id=checklist_id, fields=fields)


# =============================================================================
# TEXT FORMATS
# =============================================================================


def _loads_json(s: str) -> Any:
    try:
        return json.loads(s)
    except json.JSONDecodeError as e:
        raise ChecklistParseError(f"Invalid JSON: {e}") from e


def _loads_yaml(s: str) -> Any:
    try:
        return yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise ChecklistParseError(f"Invalid YAML: {e}") from e


def template_to_json(t: ChecklistTemplate) -> str:
    return json.dumps(template_to_dict(t), indent=2)


def template_from_json(s: str) -> ChecklistTemplate:
    return template_from_dict(_loads_json(s))


def template_to_yaml(t: ChecklistTemplate) -> str:
    return yaml.safe_dump(template_to_dict(t), sort_keys=False)


def template_from_yaml(s: str) -> ChecklistTemplate:
    return template_from_dict(_loads_yaml(s))


def answer_to_json(a: ChecklistAnswer) -> str:
    return json.dumps(answer_to_dict(a), indent=2)


def answer_from_json(s: str) -> ChecklistAnswer:
    return answer_from_dict(_loads_json(s))


def answer_to_yaml(a: ChecklistAnswer) -> str:
    return yaml.safe_dump(answer_to_dict(a), sort_keys=False)


def answer_from_yaml(s: str) -> ChecklistAnswer:
    return answer_from_dict(_loads_yaml(s))
