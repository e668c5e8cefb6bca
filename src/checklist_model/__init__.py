"""
Checklist Model Package

Data model for a checklist system built on a survey-form library:

    - Checklist templates (pages, panels, radiogroup and checkbox questions)
    - Checklist answers (fixed id fields plus dynamic keys per question)
    - Classification of page elements
    - Derived answer keys ("-Comment", "-Image")
    - Template and answer validation

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Rendering
    - PDF export
    - Analytics
    - Storage or transport

Creator, renderer and analytics tools consume this model unchanged.
"""

from checklist_model.answer_validator import validate_answer
from checklist_model.classify import (
    classify,
    is_checkbox_question,
    is_panel_element,
    is_question,
    is_radiogroup_question,
)
from checklist_model.errors import (
    ChecklistError,
    ChecklistParseError,
    ErrorCode,
    InvalidTemplateError,
    UnknownElementKindError,
    ValidationError,
    ValidationReport,
)
from checklist_model.keys import COMMENT_SUFFIX, IMAGE_SUFFIX, OTHER_VALUE, comment_key, image_key
from checklist_model.model import (
    AnswerImage,
    CheckboxQuestion,
    ChecklistAnswer,
    ChecklistPage,
    ChecklistTemplate,
    Choice,
    ElementKind,
    ImageArrayValue,
    PanelElement,
    RadioGroupQuestion,
    StringArrayValue,
    StringValue,
    UnknownElement,
    ValueKind,
)
from checklist_model.serialization import (
    answer_from_dict,
    answer_from_json,
    answer_from_yaml,
    answer_to_dict,
    answer_to_json,
    answer_to_yaml,
    template_from_dict,
    template_from_json,
    template_from_yaml,
    template_to_dict,
    template_to_json,
    template_to_yaml,
)
from checklist_model.template_validator import validate_template

__version__ = "0.1.0"
