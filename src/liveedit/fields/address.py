"""Address and overseas address component editor state.

The service models the two as different component types with opposite
defaults for some flags, so the payload encodes every flag relative to the
type being saved.
"""

from enum import Enum
from typing import Any, Optional

from ..models import FormComponent
from ..smart_string import SmartString, to_wire
from ..utils import is_optional
from .base import (
    Action,
    Changes,
    LabelledState,
    compact,
    encode_mandatory,
    labelled_payload,
    page_heading_changes,
    reducer,
    shared_changes,
    with_baseline,
)

OVERSEAS_ADDRESS = "overseasAddress"
ADDRESS = "address"


class AddressEvent(Enum):
    OVERSEAS_ADDRESS = "overseas_address"
    LABEL = "label"
    PAGE_HEADING = "page_heading"
    SHORT_NAME = "short_name"
    HELP_TEXT = "help_text"
    ERROR_SHORT_NAME = "error_short_name"
    ERROR_SHORT_NAME_START = "error_short_name_start"
    ERROR_EXAMPLE = "error_example"
    ERROR_MESSAGE = "error_message"
    LABEL_SIZE = "label_size"
    OPTIONAL = "optional"
    CITY_MANDATORY = "city_mandatory"
    COUNTY_DISPLAYED = "county_displayed"
    LINE2_MANDATORY = "line2_mandatory"
    POSTCODE_MANDATORY = "postcode_mandatory"
    COUNTRY_LOOKUP = "country_lookup"
    COUNTRY_DISPLAYED = "country_displayed"


class AddressState(LabelledState):
    is_overseas_address: bool = False
    error_short_name: Optional[SmartString] = None
    error_short_name_start: Optional[SmartString] = None
    error_example: Optional[SmartString] = None
    error_message: Optional[SmartString] = None
    label_size: Optional[str] = None
    optional: bool = False
    is_city_mandatory: bool = False
    is_county_displayed: bool = False
    is_line2_mandatory: bool = False
    is_postcode_mandatory: bool = False
    is_country_lookup: bool = True
    is_country_displayed: bool = True


_TEXT_EVENTS = {
    AddressEvent.LABEL: "label",
    AddressEvent.SHORT_NAME: "short_name",
    AddressEvent.HELP_TEXT: "help_text",
    AddressEvent.ERROR_SHORT_NAME: "error_short_name",
    AddressEvent.ERROR_SHORT_NAME_START: "error_short_name_start",
    AddressEvent.ERROR_EXAMPLE: "error_example",
    AddressEvent.ERROR_MESSAGE: "error_message",
}

_VALUE_EVENTS = {
    AddressEvent.OVERSEAS_ADDRESS: "is_overseas_address",
    AddressEvent.LABEL_SIZE: "label_size",
    AddressEvent.OPTIONAL: "optional",
    AddressEvent.CITY_MANDATORY: "is_city_mandatory",
    AddressEvent.COUNTY_DISPLAYED: "is_county_displayed",
    AddressEvent.LINE2_MANDATORY: "is_line2_mandatory",
    AddressEvent.POSTCODE_MANDATORY: "is_postcode_mandatory",
    AddressEvent.COUNTRY_LOOKUP: "is_country_lookup",
    AddressEvent.COUNTRY_DISPLAYED: "is_country_displayed",
}


@reducer
def reduce_address(state: AddressState, action: Action) -> Changes:
    match action.event:
        case AddressEvent.PAGE_HEADING:
            return page_heading_changes(action)
        case _:
            return shared_changes(state, action, _TEXT_EVENTS, _VALUE_EVENTS)


def initial_address_state(component: FormComponent) -> AddressState:
    component = component.model_copy(deep=True)
    overseas = component.type == OVERSEAS_ADDRESS
    # City is mandatory by default on overseas addresses only
    if overseas:
        city_mandatory = component.city_mandatory != "false"
    else:
        city_mandatory = component.city_mandatory == "true"

    state = AddressState(
        is_overseas_address=overseas,
        label=component.label,
        page_heading=component.label is None,
        help_text=component.help_text,
        short_name=component.short_name,
        error_short_name=component.error_short_name,
        error_short_name_start=component.error_short_name_start,
        error_example=component.error_example,
        error_message=component.error_message,
        label_size=component.label_size,
        optional=is_optional(component.mandatory),
        is_city_mandatory=city_mandatory,
        is_county_displayed=component.county_displayed == "true",
        is_line2_mandatory=component.line2_mandatory == "true",
        is_postcode_mandatory=component.postcode_mandatory == "true",
        is_country_lookup=component.country_lookup != "false",
        is_country_displayed=component.country_displayed != "false",
    )
    return with_baseline(state)


def _city_mandatory(state: AddressState) -> str:
    if state.is_overseas_address:
        return "" if state.is_city_mandatory else "false"
    return "true" if state.is_city_mandatory else ""


def address_payload(state: AddressState, component_id: str) -> dict[str, Any]:
    overseas = state.is_overseas_address
    payload = labelled_payload(state, component_id)
    payload.update(
        {
            "errorShortName": to_wire(state.error_short_name),
            "errorShortNameStart": to_wire(state.error_short_name_start),
            "errorExample": to_wire(state.error_example),
            "errorMessage": to_wire(state.error_message),
            "labelSize": state.label_size,
            "mandatory": encode_mandatory(state.optional),
            "type": OVERSEAS_ADDRESS if overseas else ADDRESS,
            "cityMandatory": _city_mandatory(state),
            "countyDisplayed": "true" if not overseas and state.is_county_displayed else "",
            "line2Mandatory": "true" if overseas and state.is_line2_mandatory else "",
            "postcodeMandatory": "true" if overseas and state.is_postcode_mandatory else "",
            "countryLookup": "" if overseas and state.is_country_lookup else "false",
            "countryDisplayed": "" if overseas and state.is_country_displayed else "false",
        }
    )
    return compact(payload)
