"""Tests for utility functions and section numbers."""

import pytest

from liveedit.errors import SectionNumberParseError
from liveedit.models import (
    AcknowledgementSectionNumber,
    AddToListPage,
    FormComponent,
    NormalPage,
    TaskListSectionNumber,
    is_task_list,
    parse_section_number,
)
from liveedit.utils import fill_missing, full_form_component_id, is_optional, mask_url, parse_non_negative, sanitize


class TestSanitize:
    def test_masks_middle(self):
        assert sanitize("ABC-1234-XYZ") == "AB***YZ"

    def test_short_and_missing(self):
        assert sanitize("abc") == "***"
        assert sanitize(None) == "***"

    def test_mask_url_hides_access_code(self):
        masked = mask_url("https://forms.example.com/render?c=0,1&a=ABC-1234-XYZ")
        assert "ABC-1234-XYZ" not in masked
        assert "a=AB***YZ" in masked
        assert "c=0,1" in masked

    def test_mask_url_without_query(self):
        assert mask_url("https://forms.example.com/x") == "https://forms.example.com/x"


@pytest.mark.parametrize(
    "raw,expected",
    [("12", "12"), ("7abc", "7"), ("-3", ""), ("", ""), ("abc", ""), (" 4 ", "4")],
)
def test_parse_non_negative(raw, expected):
    assert parse_non_negative(raw) == expected


@pytest.mark.parametrize("mandatory,expected", [("false", True), ("no", True), ("true", False), (None, False)])
def test_is_optional(mandatory, expected):
    assert is_optional(mandatory) is expected


def test_fill_missing():
    assert fill_missing({"a": None, "b": 0, "c": "x"}) == {"a": "", "b": 0, "c": "x"}


def test_full_form_component_id():
    assert full_form_component_id("pet", None) == "pet"
    assert full_form_component_id("pet", 0) == "0_pet"


class TestSectionNumbers:
    """Test section number parsing."""

    @pytest.mark.parametrize("raw", ["n0", "ad1", "ap1.2.3", "ac1.2", "ar1.2", "r4.5", "0,1,n2"])
    def test_round_trip(self, raw):
        assert parse_section_number(raw).as_string() == raw

    def test_task_list(self):
        number = parse_section_number("0,1,ap2.0.1")
        assert number == TaskListSectionNumber(0, 1, AddToListPage(2, 0, 1))
        assert is_task_list(number)
        assert not is_task_list(NormalPage(0))

    def test_acknowledgement(self):
        assert parse_section_number("") == AcknowledgementSectionNumber()

    @pytest.mark.parametrize("raw", ["x1", "n", "a,b,n0"])
    def test_invalid(self, raw):
        with pytest.raises(SectionNumberParseError):
            parse_section_number(raw)


def test_form_component_flags_accept_booleans():
    component = FormComponent.model_validate(
        {"id": "x", "type": "address", "mandatory": False, "line2Mandatory": True, "errorShortName": "Address"}
    )
    assert component.mandatory == "false"
    assert component.line2_mandatory == "true"
    assert component.error_short_name == "Address"
