"""HTTP client for the template service."""

import logging
from dataclasses import dataclass, field
from typing import Any, NoReturn, Optional

import requests

from . import routes
from .config import ServiceConfig
from .consts import JSON_CONTENT_TYPE, PERSIST_HEADERS, RENDER_BODY_ERROR, RENDER_HEADERS, RENDER_JSON_ERROR
from .errors import ClientError, ServiceException
from .models import SectionNumber
from .routes import QueueEntry
from .utils import mask_url

logger = logging.getLogger(__name__)


def _handle_request_exception(exception: requests.RequestException, operation: str) -> NoReturn:
    """Log a failed request and raise ServiceException, or ClientError for a 4xx answer."""
    status_code = getattr(exception.response, "status_code", None)
    logger.error(f"Failed to {operation}: status_code={status_code or 'N/A'}")
    if status_code and 400 <= status_code < 500:
        raise ClientError(f"Client error {status_code}: failed to {operation}") from exception
    raise ServiceException(f"Failed to {operation} (status: {status_code or 'N/A'})") from exception


def _json_body(response: requests.Response) -> dict[str, Any]:
    # 204 and other bodiless answers carry nothing to report
    if not response.text.strip():
        return {}
    try:
        body = response.json()
    except ValueError:
        return {"error": response.text}
    if not isinstance(body, dict):
        return {"error": response.text}
    return body


def _is_json(response: requests.Response) -> bool:
    return JSON_CONTENT_TYPE in response.headers.get("content-type", "")


@dataclass
class PersistResult:
    ok: bool
    status_code: int = 200
    body: dict[str, Any] = field(default_factory=dict)

    @property
    def error(self) -> Optional[str]:
        return self.body.get("error")

    @property
    def succeeded(self) -> bool:
        return self.ok and self.error is None


class TemplateServiceClient:
    """Persist, render and fetch calls against one template service host."""

    def __init__(self, config: ServiceConfig):
        self.base_url = config.base_url
        self.timeout = config.timeout
        self.access_code = config.access_code

        logger.debug(f"TemplateServiceClient initialized: base_url={self.base_url}, timeout={self.timeout}")

    def persist(self, url: str, payload: dict[str, Any]) -> PersistResult:
        """POST a partial update.

        A 2xx answer whose body carries an ``error`` key is still a failure.
        """
        logger.info(f"Persisting update: {mask_url(url)}")
        response = requests.post(url, json=payload, headers=PERSIST_HEADERS, timeout=self.timeout)
        result = PersistResult(ok=response.ok, status_code=response.status_code, body=_json_body(response))
        if not result.succeeded:
            logger.error(f"Server error when saving json data: {result.error}")
        return result

    def render(self, url: str) -> dict[str, Any]:
        """GET freshly rendered content; failures come back as ``{"error": ...}``."""
        logger.info(f"Rendering: {mask_url(url)}")
        response = requests.get(url, headers=RENDER_HEADERS, timeout=self.timeout)

        if not _is_json(response):
            error = RENDER_BODY_ERROR.format(body=response.text)
            logger.error(error)
            return {"error": error}

        body = _json_body(response)
        if response.ok:
            return body

        error = RENDER_JSON_ERROR.format(error=body.get("error"))
        logger.error(error)
        return {"error": error}

    def run_entry(self, entry: QueueEntry) -> dict[str, Any]:
        """One round trip for a queue entry: persist, then render when it has a render URL."""
        result = self.persist(entry.persist_url, entry.payload)

        if entry.persist_only:
            return {"ok": result.succeeded, "error": result.error}

        if not result.succeeded:
            return {"error": result.error or f"Server error when saving data (status: {result.status_code})"}

        return self.render(entry.render_url)

    def _fetch(self, url: str, operation: str) -> dict[str, Any]:
        try:
            logger.info(f"Fetching {operation}: {mask_url(url)}")
            response = requests.get(url, headers=RENDER_HEADERS, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            _handle_request_exception(e, f"fetch {operation}")

        try:
            return response.json()
        except ValueError as e:
            raise ServiceException(f"Invalid {operation} response: not JSON") from e

    def fetch_section(self, form_template_id: str, section_number: SectionNumber) -> dict[str, Any]:
        url = routes.original_section_url(self.base_url, form_template_id, section_number, self.access_code)
        return self._fetch(url, "original section")

    def fetch_form_template(self, form_template_id: str) -> dict[str, Any]:
        url = routes.original_form_template_url(self.base_url, form_template_id, self.access_code)
        return self._fetch(url, "original form template")

    def fetch_summary_section(self, form_template_id: str, coordinates: Optional[str] = None) -> dict[str, Any]:
        url = routes.original_summary_section_url(self.base_url, form_template_id, coordinates, self.access_code)
        return self._fetch(url, "original summary section")

    def fetch_acknowledgement(self, form_template_id: str) -> dict[str, Any]:
        url = routes.original_acknowledgement_url(self.base_url, form_template_id, self.access_code)
        return self._fetch(url, "original acknowledgement")
