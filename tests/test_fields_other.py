"""Tests for date, address, file and info component editor state."""

import pytest

from liveedit.errors import UnsupportedFieldException
from liveedit.fields import ADDRESS, CHOICE, DATE, FILE, INFO, TEXT, get_field_kind
from liveedit.fields.address import AddressEvent, address_payload, initial_address_state, reduce_address
from liveedit.fields.base import Action
from liveedit.fields.date import DateEvent, date_payload, initial_date_state, reduce_date
from liveedit.fields.file import FileEvent, file_payload, initial_file_state, reduce_file
from liveedit.fields.info import InfoEvent, info_payload, initial_info_state, reduce_info
from liveedit.models import FormComponent


class TestFieldKinds:
    """Test selecting the editor for a component type."""

    @pytest.mark.parametrize(
        "component_type,kind",
        [
            ("text", TEXT),
            ("choice", CHOICE),
            ("revealingChoice", CHOICE),
            ("date", DATE),
            ("address", ADDRESS),
            ("overseasAddress", ADDRESS),
            ("file", FILE),
            ("info", INFO),
        ],
    )
    def test_known(self, component_type, kind):
        assert get_field_kind(component_type) is kind

    def test_unknown(self):
        with pytest.raises(UnsupportedFieldException, match="group"):
            get_field_kind("group")


class TestDate:
    """Test the date editor."""

    def test_optional_and_format(self):
        state = initial_date_state(FormComponent(id="dob", type="date", label="Date of birth"))
        state = reduce_date(state, Action.component(DateEvent.OPTIONAL, True))
        state = reduce_date(state, Action.component(DateEvent.FORMAT, "before today"))
        payload = date_payload(state, "dob")
        assert payload["mandatory"] is False
        assert payload["format"] == "before today"
        assert payload["label"] == "Date of birth"


class TestAddress:
    """Test the address editor flag encoding."""

    def test_uk_address_defaults(self):
        state = initial_address_state(FormComponent(id="home", type="address", label="Home"))
        payload = address_payload(state, "home")
        assert payload["type"] == "address"
        assert payload["cityMandatory"] == ""
        assert payload["countryLookup"] == "false"
        assert payload["mandatory"] == ""

    def test_overseas_city_optional(self):
        state = initial_address_state(FormComponent(id="home", type="overseasAddress"))
        assert state.is_city_mandatory is True
        state = reduce_address(state, Action.component(AddressEvent.CITY_MANDATORY, False))
        payload = address_payload(state, "home")
        assert payload["type"] == "overseasAddress"
        assert payload["cityMandatory"] == "false"
        assert payload["countryLookup"] == ""

    def test_switch_to_overseas(self):
        state = initial_address_state(FormComponent(id="home", type="address"))
        state = reduce_address(state, Action.component(AddressEvent.OVERSEAS_ADDRESS, True))
        state = reduce_address(state, Action.component(AddressEvent.LINE2_MANDATORY, True))
        payload = address_payload(state, "home")
        assert payload["type"] == "overseasAddress"
        assert payload["line2Mandatory"] == "true"

    def test_optional(self):
        state = initial_address_state(FormComponent(id="home", type="address", mandatory="no"))
        assert address_payload(state, "home")["mandatory"] is False


class TestFile:
    """Test the file upload editor."""

    def test_mandatory_encoding(self):
        state = initial_file_state(FormComponent(id="proof", type="file", mandatory="false"))
        assert file_payload(state, "proof")["mandatory"] is False
        state = reduce_file(state, Action.component(FileEvent.OPTIONAL, False))
        assert file_payload(state, "proof")["mandatory"] == ""


class TestInfo:
    """Test the info panel editor."""

    def test_payload(self):
        component = FormComponent(id="notice", type="info", label="Note", info_text="Read this", info_type="important")
        state = reduce_info(initial_info_state(component), Action.component(InfoEvent.INFO_TEXT, "Read that"))
        assert info_payload(state, "notice") == {
            "id": "notice",
            "label": "Note",
            "infoText": "Read that",
            "infoType": "important",
        }
