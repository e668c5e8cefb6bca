"""
Classification of page elements.

`classify` is the single source of truth for telling element variants
apart. Validators and renderer adapters dispatch on its result instead of
probing attributes.

It reads the discriminant only. It does not look at children, so a panel
containing another panel still classifies as PANEL; depth rules belong to
the template validator.
"""

from checklist_model.errors import UnknownElementKindError
from checklist_model.model import ElementKind


def classify(element: object) -> ElementKind:
    """
    Return the kind of a page element.

    Accepts the ElementKind member or its wire value ("radiogroup",
    "checkbox", "panel") in the `kind` attribute.

    Raises:
        UnknownElementKindError: discriminant missing or not a known kind.
            There is no fallback.
    """
    kind = getattr(element, "kind", None)
    if isinstance(kind, ElementKind):
        return kind
    if isinstance(kind, str):
        try:
            return ElementKind(kind)
        except ValueError:
            pass
    raise UnknownElementKindError(kind)


def is_radiogroup_question(element: object) -> bool:
    return classify(element) is ElementKind.RADIOGROUP


def is_checkbox_question(element: object) -> bool:
    return classify(element) is ElementKind.CHECKBOX


def is_panel_element(element: object) -> bool:
    return classify(element) is ElementKind.PANEL


def is_question(element: object) -> bool:
    """True for RadioGroup or Checkbox questions."""
    return classify(element) in (ElementKind.RADIOGROUP, ElementKind.CHECKBOX)
