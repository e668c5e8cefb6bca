"""
Example checklist for demos and tests.

Builds a small two-page site inspection checklist that uses every element
kind: a radiogroup with an "Other" item, a checkbox accepting photos, and a
panel grouping questions. `build_example_answer` fills it in validly.
"""
from checklist_model.keys import comment_key, image_key
from checklist_model.model import (
    AnswerImage,
    CheckboxQuestion,
    ChecklistAnswer,
    ChecklistPage,
    ChecklistTemplate,
    Choice,
    ImageArrayValue,
    PanelElement,
    RadioGroupQuestion,
    StringArrayValue,
    StringValue,
)

# 1x1 transparent PNG
_PIXEL_PNG = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


def _yes_no():
    return (Choice(value="Item 1", text="Yes"), Choice(value="Item 2", text="No"))


def build_example_template(template_id: str = "site-inspection") -> ChecklistTemplate:
    access = RadioGroupQuestion(
        name="siteAccess",
        title="Is the site accessible?",
        description="Check gates, roads and signage.",
        is_required=True,
        choices=_yes_no(),
        show_other_item=True,
    )
    hazards = CheckboxQuestion(
        name="hazards",
        title="Which hazards are present?",
        description="Select all that apply and attach photos.",
        is_required=False,
        choices=(
            Choice(value="Item 1", text="Trip hazards"),
            Choice(value="Item 2", text="Exposed wiring"),
            Choice(value="Item 3", text="Standing water"),
        ),
        show_other_item=True,
        show_image_upload=True,
    )

    ppe_panel = PanelElement(
        name="ppe",
        title="Protective equipment",
        description="Confirm crew equipment before work starts.",
        elements=(
            RadioGroupQuestion(
                name="helmets",
                title="Are helmets worn?",
                description="",
                is_required=True,
                choices=_yes_no(),
            ),
            CheckboxQuestion(
                name="ppeItems",
                title="Which items were issued?",
                description="",
                is_required=False,
                choices=(
                    Choice(value="Item 1", text="Gloves"),
                    Choice(value="Item 2", text="Goggles"),
                    Choice(value="Item 3", text="Hi-vis vest"),
                ),
            ),
        ),
    )

    signoff = RadioGroupQuestion(
        name="safeToProceed",
        title="Is it safe to proceed?",
        description="",
        is_required=True,
        choices=_yes_no(),
    )

    return ChecklistTemplate(
        id=template_id,
        title="Site inspection",
        description="Pre-work inspection for field crews.",
        pages=(
            ChecklistPage(name="page1", elements=(access, hazards)),
            ChecklistPage(name="page2", elements=(ppe_panel, signoff)),
        ),
    )


def build_example_answer(answer_id: str = "answer-1",
                         template_id: str = "site-inspection") -> ChecklistAnswer:
    """A valid answer for `build_example_template()`."""
    return ChecklistAnswer(
        id=answer_id,
        checklist_id=template_id,
        fields={
            "siteAccess": StringValue("other"),
            comment_key("siteAccess"): StringValue("Gate locked, entered via side road"),
            "hazards": StringArrayValue(("Item 1", "Item 3")),
            image_key("hazards"): ImageArrayValue(
                (AnswerImage(name="puddle.png", type="image/png", content=_PIXEL_PNG),)
            ),
            "helmets": StringValue("Item 1"),
            "ppeItems": StringArrayValue(("Item 1", "Item 3")),
            "safeToProceed": StringValue("Item 1"),
        },
    )
