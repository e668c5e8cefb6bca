"""
Tests for serialization and deserialization of checklist objects.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `checklist_model.serialization`, and that the
wire field names match what the survey-form library produces.
"""

import json

import pytest
from checklist_model.answer_validator import validate_answer
from checklist_model.errors import ChecklistParseError, ErrorCode
from checklist_model.examples import build_example_answer, build_example_template
from checklist_model.model import (
    CheckboxQuestion,
    ChecklistPage,
    ChecklistTemplate,
    Choice,
    ImageArrayValue,
    PanelElement,
    RadioGroupQuestion,
    StringArrayValue,
    StringValue,
    UnknownElement,
)
from checklist_model.serialization import (
    answer_from_dict,
    answer_from_json,
    answer_from_yaml,
    answer_to_dict,
    answer_to_json,
    answer_to_yaml,
    element_to_dict,
    template_from_dict,
    template_from_json,
    template_from_yaml,
    template_to_dict,
    template_to_json,
    template_to_yaml,
)
from checklist_model.template_validator import validate_template

SURVEY_JSON = """
{
  "id": "t1",
  "title": "Daily check",
  "description": "",
  "pages": [
    {
      "name": "page1",
      "elements": [
        {
          "type": "radiogroup",
          "name": "question1",
          "title": "Is the area clean?",
          "description": "",
          "isRequired": true,
          "choices": [{"value": "Item 1", "text": "Yes"}, {"value": "Item 2", "text": "No"}],
          "showOtherItem": true
        },
        {
          "type": "panel",
          "name": "panel1",
          "title": "Equipment",
          "description": "",
          "elements": [
            {
              "type": "checkbox",
              "name": "question5",
              "title": "Which tools are damaged?",
              "description": "",
              "isRequired": false,
              "choices": [{"value": "Item 1", "text": "Drill"}, {"value": "Item 2", "text": "Saw"}],
              "showImageUpload": true
            }
          ]
        }
      ]
    }
  ]
}
"""

ANSWER_JSON = """
{
  "id": "a1",
  "checklistId": "t1",
  "question1": "other",
  "question1-Comment": "Custom text",
  "question5": ["Item 2", "other"],
  "question5-Comment": "See photo",
  "question5-Image": [{"name": "saw.png", "type": "image/png", "content": "AAAA"}]
}
"""


def test_template_json_roundtrip():
    template = build_example_template()
    restored = template_from_json(template_to_json(template))
    assert restored == template
    assert template_to_dict(restored) == template_to_dict(template)


def test_template_yaml_roundtrip():
    template = build_example_template()
    assert template_from_yaml(template_to_yaml(template)) == template


def test_answer_json_roundtrip():
    answer = build_example_answer()
    restored = answer_from_json(answer_to_json(answer))
    assert restored == answer
    assert restored.keys() == answer.keys()


def test_answer_yaml_roundtrip():
    answer = build_example_answer()
    assert answer_from_yaml(answer_to_yaml(answer)) == answer


def test_decode_survey_json():
    template = template_from_json(SURVEY_JSON)
    assert template.id == "t1"
    q1 = template.get_question("question1")
    assert isinstance(q1, RadioGroupQuestion)
    assert q1.is_required is True
    assert q1.show_other_item is True
    assert q1.choices == (Choice("Item 1", "Yes"), Choice("Item 2", "No"))

    q5 = template.get_question("question5")
    assert isinstance(q5, CheckboxQuestion)
    assert q5.show_image_upload is True
    assert q5.show_other_item is None

    assert isinstance(template.pages[0].elements[1], PanelElement)
    assert validate_template(template).is_valid


def test_encode_uses_wire_field_names():
    data = template_to_dict(template_from_json(SURVEY_JSON))
    assert data == json.loads(SURVEY_JSON)


def test_absent_optional_flags_are_omitted():
    data = element_to_dict(CheckboxQuestion(name="q1", choices=(Choice("Item 1", "Yes"),)))
    assert "showOtherItem" not in data
    assert "showImageUpload" not in data
    assert data["type"] == "checkbox"
    assert data["isRequired"] is False


def test_false_flags_are_kept():
    q = RadioGroupQuestion(name="q1", choices=(Choice("Item 1", "Yes"),), show_other_item=False)
    assert element_to_dict(q)["showOtherItem"] is False


def test_choice_text_defaults_to_value():
    data = {"id": "t1", "pages": [{"name": "p", "elements": [
        {"type": "radiogroup", "name": "q1", "choices": [{"value": "A"}]}
    ]}]}
    q1 = template_from_dict(data).get_question("q1")
    assert q1.choices == (Choice(value="A", text="A"),)


def test_decode_answer_json():
    answer = answer_from_json(ANSWER_JSON)
    assert answer.id == "a1"
    assert answer.checklist_id == "t1"
    assert answer.get("question1") == StringValue("other")
    assert answer.get("question5") == StringArrayValue(("Item 2", "other"))
    images = answer.get("question5-Image")
    assert isinstance(images, ImageArrayValue)
    assert images.images[0].name == "saw.png"
    assert "id" not in answer.fields
    assert "checklistId" not in answer.fields


def test_encode_answer_flat():
    assert answer_to_dict(answer_from_json(ANSWER_JSON)) == json.loads(ANSWER_JSON)


def test_empty_list_is_empty_selection():
    """An empty list is absent either way; it decodes as an empty selection."""
    answer = answer_from_dict({"id": "a1", "checklistId": "t1", "q1": [], "q1-Image": []})
    assert answer.get("q1") == StringArrayValue(())
    assert answer.get("q1-Image") == StringArrayValue(())


def test_list_of_mappings_is_image_array():
    answer = answer_from_dict({"id": "a1", "checklistId": "t1",
                               "q1-Image": [{"name": "a.png", "type": "image/png", "content": "AAAA"}]})
    assert isinstance(answer.get("q1-Image"), ImageArrayValue)


def test_question_named_like_an_image_key():
    """A checkbox may be called "site-Image"; its selections stay selections."""
    template = template_from_dict({"id": "t1", "pages": [{"name": "page1", "elements": [
        {"type": "checkbox", "name": "site-Image", "isRequired": True,
         "choices": [{"value": "Item 1", "text": "Yes"}]}
    ]}]})
    assert validate_template(template).is_valid

    answer = answer_from_dict({"id": "a1", "checklistId": "t1", "site-Image": ["Item 1"]})
    assert answer.get("site-Image") == StringArrayValue(("Item 1",))
    assert validate_answer(template, answer).is_valid


def test_unknown_element_type_decodes_to_placeholder():
    data = {"id": "t1", "pages": [{"name": "p", "elements": [
        {"type": "text", "name": "m", "title": "Notes"},
        {"type": "radiogroup", "name": "q1", "choices": []},
    ]}]}
    template = template_from_dict(data)
    assert template.pages[0].elements[0] == UnknownElement(name="m", kind="text", title="Notes")
    assert validate_template(template).pairs() == [
        (ErrorCode.UNKNOWN_ELEMENT_KIND, "p/m"),
        (ErrorCode.EMPTY_CHOICES, "p/q1"),
    ]


def test_unknown_element_roundtrip():
    data = {"id": "t1", "pages": [{"name": "p", "elements": [
        {"type": "text", "name": "m", "title": "", "description": ""},
        {"name": "n", "title": "", "description": ""},
    ]}]}
    assert template_to_dict(template_from_dict(data)) == {"title": "", "description": "", **data}


def test_null_answer_fields_are_dropped():
    answer = answer_from_dict({"id": "a1", "checklistId": "t1", "q1": None})
    assert answer.keys() == ()


def test_nested_panel_is_decoded_for_validation():
    data = {"id": "t1", "pages": [{"name": "page1", "elements": [
        {"type": "panel", "name": "outer", "elements": [
            {"type": "panel", "name": "inner", "elements": []}
        ]}
    ]}]}
    template = template_from_dict(data)
    assert validate_template(template).pairs() == [(ErrorCode.NESTED_PANEL, "page1/outer/inner")]


def test_order_preserved():
    template = ChecklistTemplate(
        id="t1",
        pages=(
            ChecklistPage(name="b", elements=(RadioGroupQuestion(name="z", choices=(Choice("2", "two"), Choice("1", "one"))),)),
            ChecklistPage(name="a", elements=(RadioGroupQuestion(name="y", choices=(Choice("1", "one"),)),)),
        ),
    )
    restored = template_from_json(template_to_json(template))
    assert [p.name for p in restored.pages] == ["b", "a"]
    assert [c.value for c in restored.pages[0].elements[0].choices] == ["2", "1"]


class TestDecodeErrors:
    @pytest.mark.parametrize("field, raw", [("name", 123), ("title", True), ("description", ["x"])])
    def test_element_string_fields(self, field, raw):
        element = {"type": "radiogroup", "name": "q1", "choices": [{"value": "Item 1"}]}
        element[field] = raw
        data = {"id": "t1", "pages": [{"name": "p", "elements": [element]}]}
        with pytest.raises(ChecklistParseError, match=field):
            template_from_dict(data)

    @pytest.mark.parametrize("data", [
        {"id": 7, "pages": []},
        {"id": "t1", "pages": [{"name": True, "elements": []}]},
        {"id": "t1", "pages": [{"name": "p", "elements": [
            {"type": "checkbox", "name": "q1", "choices": [{"value": 1, "text": "One"}]}
        ]}]},
    ])
    def test_non_string_ids_and_values(self, data):
        with pytest.raises(ChecklistParseError):
            template_from_dict(data)

    def test_name_from_yaml_number(self):
        with pytest.raises(ChecklistParseError):
            template_from_yaml("id: t1\npages:\n  - name: 123\n    elements: []\n")

    def test_flag_must_be_boolean(self):
        data = {"id": "t1", "pages": [{"name": "p", "elements": [
            {"type": "checkbox", "name": "q1", "choices": [], "showImageUpload": "yes"}
        ]}]}
        with pytest.raises(ChecklistParseError, match="showImageUpload"):
            template_from_dict(data)

    def test_mixed_answer_list(self):
        with pytest.raises(ChecklistParseError):
            answer_from_dict({"id": "a1", "checklistId": "t1",
                              "q1-Image": ["Item 1", {"name": "a", "type": "image/png", "content": "AAAA"}]})

    def test_image_content_must_be_string(self):
        with pytest.raises(ChecklistParseError, match="content"):
            answer_from_dict({"id": "a1", "checklistId": "t1",
                              "q1-Image": [{"name": "a.png", "type": "image/png", "content": 5}]})

    def test_answer_key_must_be_string(self):
        with pytest.raises(ChecklistParseError):
            answer_from_dict({"id": "a1", "checklistId": "t1", 3: "Item 1"})

    def test_missing_template_id(self):
        with pytest.raises(ChecklistParseError):
            template_from_dict({"pages": []})

    def test_template_not_a_mapping(self):
        with pytest.raises(ChecklistParseError):
            template_from_dict(["not", "a", "template"])

    def test_pages_not_a_list(self):
        with pytest.raises(ChecklistParseError):
            template_from_dict({"id": "t1", "pages": "page1"})

    def test_invalid_json(self):
        with pytest.raises(ChecklistParseError):
            template_from_json("{not json")

    def test_invalid_yaml(self):
        with pytest.raises(ChecklistParseError):
            answer_from_yaml("id: [unclosed")

    def test_answer_missing_checklist_id(self):
        with pytest.raises(ChecklistParseError):
            answer_from_dict({"id": "a1"})

    @pytest.mark.parametrize("raw", [42, True, {"a": 1}, ["Item 1", 2]])
    def test_unsupported_answer_value(self, raw):
        with pytest.raises(ChecklistParseError):
            answer_from_dict({"id": "a1", "checklistId": "t1", "q1": raw})

    def test_image_missing_content(self):
        with pytest.raises(ChecklistParseError):
            answer_from_dict({"id": "a1", "checklistId": "t1",
                              "q1-Image": [{"name": "a.png", "type": "image/png"}]})
