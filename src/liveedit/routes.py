"""Persist and render URLs of the template service, per target kind."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional
from urllib.parse import quote, urlencode

from .builder import EditRequest
from .consts import (
    ERROR_REPORT_PREFIX,
    MISSING_COMPONENT_ID,
    PARAM_ACCESS_CODE,
    PARAM_COORDINATES,
    PARAM_SECTION_PATH,
    PERSIST_PREFIX,
    RENDER_PREFIX,
)
from .enums import TargetKind
from .errors import LiveEditException
from .models import SectionNumber, is_task_list
from .utils import full_form_component_id

logger = logging.getLogger(__name__)

Callback = Callable[[dict[str, Any]], None]

CoordinateSource = Literal["coordinates", "section_number"]


@dataclass(frozen=True)
class QueueEntry:
    """A persist call, optionally followed by a render call."""

    persist_url: str
    render_url: Optional[str]
    payload: dict[str, Any]
    on_complete: Callback

    @property
    def persist_only(self) -> bool:
        return self.render_url is None


@dataclass(frozen=True)
class Route:
    persist: str
    render: Optional[str] = None
    section_path: bool = False
    coordinates: Optional[CoordinateSource] = None


ROUTES: dict[TargetKind, Route] = {
    TargetKind.FORM_COMPONENT: Route(
        "update-form-component/{ft}/{fc}",
        "generate-section-and-component-html/{ft}/{sn}/{full_fc}",
    ),
    TargetKind.SECTION: Route(
        "update-header/{ft}",
        "generate-section-and-component-html/{ft}/{sn}/{fc}",
    ),
    TargetKind.SECTION_NOTE: Route("update-header/{ft}"),
    TargetKind.FORM_TEMPLATE: Route("update-form-template/{ft}"),
    TargetKind.ATL_DEFAULT_PAGE: Route(
        "update-atl-default-page/{ft}",
        "generate-atl-default-page/{ft}/{sn}",
        section_path=True,
    ),
    TargetKind.ATL_DEFAULT_PAGE_NOTE: Route("update-atl-default-page/{ft}", section_path=True),
    TargetKind.ATL_DEFAULT_PAGE_COMPONENT: Route(
        "update-atl-default-page/form-component/{ft}/{fc}",
        "generate-component-html-atl-default-page/{ft}/{sn}/{fc}",
        section_path=True,
    ),
    TargetKind.ATL_CYA_PAGE: Route(
        "update-atl-cya-page/{ft}",
        "generate-atl-cya-page/{ft}/{sn}",
        section_path=True,
    ),
    TargetKind.ATL_CYA_PAGE_NOTE: Route("update-atl-cya-page/{ft}", section_path=True),
    TargetKind.ATL_REPEATER: Route(
        "update-atl-repeater/{ft}",
        "generate-atl-repeater/{ft}/{sn_after}",
        section_path=True,
    ),
    TargetKind.ATL_REPEATER_NOTE: Route("update-atl-repeater/{ft}", section_path=True),
    TargetKind.ATL_REPEATER_ADD_ANOTHER_QUESTION: Route(
        "update-atl-repeater/add-another-question/{ft}",
        "generate-atl-repeater/add-another-question/{ft}/{sn}",
        section_path=True,
    ),
    TargetKind.ATL_REPEATER_COMPONENT: Route(
        "update-atl-repeater/form-component/{ft}/{fc}",
        "generate-component-html-atl-repeater/{ft}/{sn}/{fc}",
        section_path=True,
    ),
    TargetKind.ACKNOWLEDGEMENT: Route(
        "update-acknowledgement/{ft}",
        "generate-acknowledgement-panel-html/{ft}",
    ),
    TargetKind.ACKNOWLEDGEMENT_NOTE: Route("update-acknowledgement/{ft}"),
    TargetKind.ACKNOWLEDGEMENT_COMPONENT: Route(
        "update-acknowledgement-form-component/{ft}/{fc}",
        "generate-component-html-acknowledgement-section/{ft}/{fc}",
    ),
    TargetKind.SUMMARY_SECTION: Route(
        "update-summary-section/{ft}",
        "generate-summary-section/{ft}",
        coordinates="coordinates",
    ),
    TargetKind.SUMMARY_SECTION_NOTE: Route("update-summary-section/{ft}", coordinates="coordinates"),
    TargetKind.SUMMARY_SECTION_COMPONENT: Route(
        "update-summary-section-form-component/{ft}/{fc}",
        "generate-component-html-summary-section/{ft}/{fc}",
        coordinates="section_number",
    ),
    TargetKind.TASK_SECTION: Route("update-batch/{ft}", "generate-task-list/{ft}/{sn}"),
    TargetKind.SUBMIT_SECTION: Route("update-batch/{ft}", "generate-submit-section/{ft}"),
}


def _segment(value: Any) -> str:
    return quote(str(value), safe=",.")


def _section_string(section_number: Optional[SectionNumber]) -> str:
    return section_number.as_string() if section_number is not None else ""


def _path_values(request: EditRequest) -> dict[str, str]:
    component_id = request.component_id or MISSING_COMPONENT_ID
    after = request.section_number_after_update or request.section_number
    return {
        "ft": _segment(request.form_template_id),
        "fc": _segment(component_id),
        "full_fc": _segment(full_form_component_id(component_id, request.atl_iteration_index)),
        "sn": _segment(_section_string(request.section_number)),
        "sn_after": _segment(_section_string(after)),
    }


def _coordinates_param(route: Route, request: EditRequest) -> Optional[str]:
    match route.coordinates:
        case "coordinates":
            return request.coordinates.as_string() if request.coordinates is not None else None
        case "section_number":
            if request.section_number is not None and is_task_list(request.section_number):
                return request.section_number.as_string()
            return None
        case _:
            return None


def _with_query(url: str, params: list[tuple[str, str]]) -> str:
    if not params:
        return url
    return f"{url}?{urlencode(params, safe=',')}"


def build_urls(host: str, request: EditRequest) -> tuple[str, Optional[str]]:
    """Persist and render URLs for a request; render is None for persist-only kinds."""
    route = ROUTES.get(request.target_kind)
    if route is None:
        raise LiveEditException(f"No route for target kind: {request.target_kind}")

    host = host.rstrip("/")
    values = _path_values(request)

    persist_params: list[tuple[str, str]] = []
    render_params: list[tuple[str, str]] = []

    if route.section_path:
        persist_params.append((PARAM_SECTION_PATH, request.section_path or ""))

    coordinates = _coordinates_param(route, request)
    if coordinates is not None:
        persist_params.append((PARAM_COORDINATES, coordinates))
        render_params.append((PARAM_COORDINATES, coordinates))

    # The access code only grants rendering of a session's data
    if request.access_code is not None:
        render_params.append((PARAM_ACCESS_CODE, request.access_code))

    persist_url = _with_query(f"{host}{PERSIST_PREFIX}/{route.persist.format(**values)}", persist_params)
    render_url = None
    if route.render is not None:
        render_url = _with_query(f"{host}{RENDER_PREFIX}/{route.render.format(**values)}", render_params)

    return persist_url, render_url


def queue_entry(host: str, request: EditRequest, on_complete: Callback) -> QueueEntry:
    persist_url, render_url = build_urls(host, request)
    return QueueEntry(
        persist_url=persist_url,
        render_url=render_url,
        payload=request.payload,
        on_complete=on_complete,
    )


# ==================== Fetch Endpoints ====================


def _fetch_url(host: str, path: str, params: list[tuple[str, str]], access_code: Optional[str]) -> str:
    if access_code is not None:
        params = [*params, (PARAM_ACCESS_CODE, access_code)]
    return _with_query(f"{host.rstrip('/')}{RENDER_PREFIX}/{path}", params)


def original_section_url(
    host: str, form_template_id: str, section_number: SectionNumber, access_code: Optional[str] = None
) -> str:
    path = f"original-section/{_segment(form_template_id)}/{_segment(section_number.as_string())}"
    return _fetch_url(host, path, [], access_code)


def original_form_template_url(host: str, form_template_id: str, access_code: Optional[str] = None) -> str:
    return _fetch_url(host, f"original-form-template/{_segment(form_template_id)}", [], access_code)


def original_summary_section_url(
    host: str,
    form_template_id: str,
    coordinates: Optional[str] = None,
    access_code: Optional[str] = None,
) -> str:
    params = [(PARAM_COORDINATES, coordinates)] if coordinates else []
    return _fetch_url(host, f"original-summary-section/{_segment(form_template_id)}", params, access_code)


def original_acknowledgement_url(host: str, form_template_id: str, access_code: Optional[str] = None) -> str:
    return _fetch_url(host, f"original-acknowledgement/{_segment(form_template_id)}", [], access_code)


def error_report_url(host: str, form_template_id: str, component_id: str) -> str:
    """Link to the service's error report for one component."""
    params = [
        ("jsonReport", "false"),
        ("baseComponentId", component_id),
        ("isUsageReport", "false"),
    ]
    return _with_query(f"{host.rstrip('/')}{ERROR_REPORT_PREFIX}/{_segment(form_template_id)}", params)
