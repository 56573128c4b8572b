"""Applying service responses to an editor's page."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from pydantic import ValidationError

from .models import ServiceModel

logger = logging.getLogger(__name__)


class RenderResponse(ServiceModel):
    """Rendered content returned by the service after an update."""

    html: Optional[str] = None
    section_html: Optional[str] = None
    form_level_heading: Optional[bool] = None
    page_heading: Optional[str] = None
    descriptions: Optional[list[str]] = None
    title: Optional[str] = None
    label: Optional[str] = None
    error: Optional[str] = None


@dataclass
class ErrorSlot:
    """The place an editor shows server errors."""

    message: str = ""
    visible: bool = False

    def show(self, message: str) -> None:
        self.message = message
        self.visible = True

    def hide(self) -> None:
        self.message = ""
        self.visible = False


class ResponseApplier:
    """Callback that routes a response to the page or to the error slot.

    The ``success_field`` key (``html`` unless a page editor says otherwise)
    means success. Otherwise the ``error`` string is shown, and a
    response carrying neither is shown as raw JSON.
    """

    def __init__(
        self,
        on_success: Callable[[RenderResponse], None],
        slot: Optional[ErrorSlot] = None,
        success_field: str = "html",
    ):
        self.on_success = on_success
        self.success_field = success_field
        self.slot = slot or ErrorSlot()

    def __call__(self, response: dict[str, Any]) -> None:
        try:
            parsed = RenderResponse.model_validate(response)
        except ValidationError:
            logger.warning("Unexpected response shape")
            self.slot.show(json.dumps(response))
            return

        if getattr(parsed, self.success_field) is not None:
            self.slot.hide()
            self.on_success(parsed)
        elif parsed.error:
            self.slot.show(parsed.error)
        else:
            logger.warning(f"Response has neither {self.success_field} nor error")
            self.slot.show(json.dumps(response))
