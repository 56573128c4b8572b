"""Locale-variant text values and their update operations.

A SmartString is one of:

* a bare ``str``,
* a single-locale ``LocalisedText`` (``{"en": ...}`` on the wire),
* a list of ``Variant`` (``[{"en": ..., "includeIf": ...}, ...]``), where every
  variant but the last carries a condition and the last one is the fallback.

The shape of a value is fixed when a field state is created from server data.
Update operations replace text, never the shape.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Annotated, Any, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, TypeAdapter, model_validator

from .enums import VariantField

logger = logging.getLogger(__name__)


class LocalisedText(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    primary: str = Field(alias="en")


class Variant(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    primary: str = Field(alias="en")
    condition: Optional[str] = Field(default=None, alias="includeIf")

    @model_validator(mode="before")
    @classmethod
    def standardize_bare_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"en": data}
        return data


def check_fallback(variants: list[Variant]) -> list[Variant]:
    """The last variant is shown when no condition holds, so it has none."""
    if variants and variants[-1].condition is not None:
        raise ValueError("The last variant is the fallback and cannot have a condition")
    return variants


SmartString = Union[str, LocalisedText, Annotated[list[Variant], AfterValidator(check_fallback)]]

_adapter = TypeAdapter(Optional[SmartString])


@dataclass(frozen=True)
class SmartStringEdit:
    """A single keystroke-level edit of a SmartString.

    ``index`` and ``field`` only matter when the edited value is a variant list.
    """

    text: str
    index: int = 0
    field: VariantField = VariantField.PRIMARY


def parse_smart_string(raw: Any) -> Optional[SmartString]:
    """Build a SmartString from server JSON."""
    if raw is None:
        return None
    if isinstance(raw, list) and not raw:
        raise ValueError("A variant list needs at least one variant")
    return _adapter.validate_python(raw)


def update_scalar(current: Optional[SmartString], text: str) -> SmartString:
    if current is None or isinstance(current, str):
        return text
    if isinstance(current, LocalisedText):
        return LocalisedText(primary=text)
    raise TypeError("update_scalar cannot edit a variant list, use update_variant")


def update_variant(
    variants: list[Variant],
    index: int,
    field: VariantField,
    text: str,
) -> list[Variant]:
    """Edit one variant in place and return the same list."""
    if not 0 <= index < len(variants):
        raise IndexError(f"Variant index {index} out of range for {len(variants)} variants")

    if field is VariantField.CONDITION and index == len(variants) - 1:
        raise ValueError("The last variant is the fallback and cannot have a condition")

    variant = variants[index]
    if field is VariantField.CONDITION:
        variant.condition = text
    else:
        variant.primary = text
    return variants


def apply_edit(current: Optional[SmartString], edit: SmartStringEdit) -> SmartString:
    """Apply an edit without touching ``current``.

    Variant lists are copied before the indexed variant is updated, so the
    state that held ``current`` keeps its value.
    """
    if isinstance(current, list):
        copied = [variant.model_copy() for variant in current]
        return update_variant(copied, edit.index, edit.field, edit.text)
    return update_scalar(current, edit.text)


def primary_text(value: Optional[SmartString]) -> str:
    """The text shown by default: the fallback variant for a variant list."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, LocalisedText):
        return value.primary
    return value[-1].primary


def to_wire(value: Optional[SmartString], normalize: bool = False) -> Any:
    """Serialize a SmartString for the template service.

    A bare string stays a string unless ``normalize`` is set, for endpoints
    whose schema only accepts the object form.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return {"en": value} if normalize else value
    if isinstance(value, LocalisedText):
        return value.model_dump(by_alias=True)
    return [variant.model_dump(by_alias=True, exclude_none=True) for variant in value]


def english_only(obj: Any) -> Any:
    """Collapse ``{"en": ..., "cy": ...}`` objects of server data into their English text.

    Objects carrying anything besides locales are kept as they are. ``choices``
    lists are left untouched because their hints and conditions live beside
    the text.
    """
    if isinstance(obj, dict):
        if "en" in obj:
            if any(key not in ("en", "cy") for key in obj):
                return obj
            return obj["en"]
        return {
            key: value if key == "choices" else english_only(value)
            for key, value in obj.items()
        }
    if isinstance(obj, list):
        return [english_only(item) for item in obj]
    return obj
