"""Persistence Backend Client"""

from typing import Any

import httpx
import pybreaker
from pydantic import ValidationError as PydanticValidationError

from ..core import (
    JSONParseError,
    SaveRequest,
    Settings,
    TemplateRequest,
    ValidationError,
    get_logger,
    get_settings,
    loads,
    parse_forest_json,
)
from ..monitoring import MetricsCollector, metrics_collector
from ..persistence import PersistenceError, ProjectRecord, RecordNotFound, TemplateRecord

logger = get_logger(__name__)


class BreakerListener(pybreaker.CircuitBreakerListener):
    """Listener for circuit breaker state changes."""

    def state_change(self, cb, old_state, new_state):
        """Called when circuit breaker state changes."""
        logger.warning(
            "breaker_state_change",
            breaker=cb.name,
            from_state=str(old_state),
            to_state=str(new_state),
        )


class PersistenceClient:
    """
    Client for the projects/templates REST API with circuit breaker protection.

    Implements the persistence adapter protocol. Transport failures, 5xx
    responses and an open breaker all surface as PersistenceError; a 404 as
    RecordNotFound.
    """

    def __init__(
        self,
        backend_url: str = "http://localhost:3001",
        timeout: float = 5.0,
        fail_max: int = 5,
        reset_timeout: int = 30,
        settings: Settings | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        """
        Initialize backend client with circuit breaker.

        Args:
            backend_url: Base URL of the persistence API
            timeout: Request timeout in seconds
            fail_max: Consecutive failures before the breaker opens
            reset_timeout: Seconds the breaker stays open
        """
        self.backend_url = backend_url.rstrip("/")
        self.timeout = timeout
        self.settings = settings or get_settings()
        self.metrics = metrics or metrics_collector
        self._client = httpx.Client(timeout=timeout)

        self._breaker = pybreaker.CircuitBreaker(
            fail_max=fail_max,
            reset_timeout=reset_timeout,
            name="persistence-http",
            listeners=[BreakerListener()],
        )

        logger.info("client_init", url=self.backend_url)

    @classmethod
    def from_settings(cls, settings: Settings, metrics: MetricsCollector | None = None) -> "PersistenceClient":
        return cls(
            backend_url=settings.backend_url,
            timeout=settings.backend_timeout,
            fail_max=settings.breaker_fail_max,
            reset_timeout=settings.breaker_reset_timeout,
            settings=settings,
            metrics=metrics,
        )

    # ========================================================================
    # Adapter protocol
    # ========================================================================

    def save(self, serialized: str, *, name: str = "Untitled", description: str | None = None) -> str:
        """
        Create a project from a serialized forest.

        Returns:
            Id of the created project
        """
        request = _validated(SaveRequest, name=name, description=description)
        body = {
            "name": request.name,
            "description": request.description,
            "components": self._decode_forest(serialized),
        }
        data = self._request("save", "POST", "/api/projects", json=body)
        record = _parse(ProjectRecord, data)
        logger.info("project_saved", record_id=record.id)
        return record.id

    def load(self, record_id: str) -> str:
        return self.get_project(record_id).components

    # ========================================================================
    # Projects
    # ========================================================================

    def list_projects(self) -> list[ProjectRecord]:
        data = self._request("list_projects", "GET", "/api/projects")
        return [_parse(ProjectRecord, row) for row in _rows(data)]

    def get_project(self, record_id: str) -> ProjectRecord:
        data = self._request("get_project", "GET", f"/api/projects/{record_id}", record_id=record_id)
        return _parse(ProjectRecord, data)

    def update(
        self,
        record_id: str,
        *,
        serialized: str | None = None,
        name: str | None = None,
        description: str | None = None,
    ) -> ProjectRecord:
        """Partial update; the server keeps fields that are not sent."""
        body: dict[str, Any] = {}
        if name is not None:
            body["name"] = _validated(SaveRequest, name=name).name
        if description is not None:
            body["description"] = description
        if serialized is not None:
            body["components"] = self._decode_forest(serialized)

        data = self._request("update", "PUT", f"/api/projects/{record_id}", record_id=record_id, json=body)
        return _parse(ProjectRecord, data)

    def delete(self, record_id: str) -> None:
        self._request("delete", "DELETE", f"/api/projects/{record_id}", record_id=record_id)
        logger.info("project_deleted", record_id=record_id)

    # ========================================================================
    # Templates
    # ========================================================================

    def list_templates(self) -> list[TemplateRecord]:
        data = self._request("list_templates", "GET", "/api/templates")
        return [_parse(TemplateRecord, row) for row in _rows(data)]

    def get_template(self, template_id: str) -> TemplateRecord:
        data = self._request(
            "get_template", "GET", f"/api/templates/{template_id}", record_id=template_id, kind="Template"
        )
        return _parse(TemplateRecord, data)

    def create_template(
        self,
        serialized: str,
        *,
        name: str,
        description: str | None = None,
        thumbnail: str | None = None,
    ) -> TemplateRecord:
        request = _validated(TemplateRequest, name=name, description=description, thumbnail=thumbnail)
        body = {
            "name": request.name,
            "description": request.description,
            "components": self._decode_forest(serialized),
            "thumbnail": request.thumbnail,
        }
        data = self._request("create_template", "POST", "/api/templates", json=body)
        return _parse(TemplateRecord, data)

    # ========================================================================
    # Transport
    # ========================================================================

    def health_check(self) -> bool:
        """
        Check if the backend is reachable (bypasses circuit breaker).

        Returns:
            True if backend is healthy
        """
        try:
            response = self._client.get(f"{self.backend_url}/api/templates", timeout=2.0)
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    def _request(
        self,
        operation: str,
        method: str,
        path: str,
        record_id: str | None = None,
        kind: str = "Project",
        **kwargs: Any,
    ) -> Any:
        url = f"{self.backend_url}{path}"

        def _make_request() -> httpx.Response:
            response = self._client.request(method, url, **kwargs)
            # Only server-side failures count against the breaker
            if response.status_code >= 500:
                response.raise_for_status()
            return response

        status = "error"

        def _record(elapsed: float) -> None:
            self.metrics.record_persistence(operation, status, elapsed)

        with self.metrics.measure_duration(_record):
            try:
                response = self._breaker.call(_make_request)
                if response.status_code == 404 and record_id is not None:
                    status = "not_found"
                    raise RecordNotFound(record_id, kind)
                if response.status_code >= 400:
                    raise PersistenceError(
                        f"{operation} failed: HTTP {response.status_code} {_error_text(response)}"
                    )
                data = None if response.status_code == 204 or not response.content else loads(response.content)
                status = "success"
                return data

            except pybreaker.CircuitBreakerError as e:
                logger.error("request_failed", op=operation, error="Circuit breaker open")
                raise PersistenceError(f"{operation} failed: persistence backend unavailable") from e
            except httpx.HTTPError as e:
                logger.warning("http_error", op=operation, error=str(e))
                raise PersistenceError(f"{operation} failed: {e}") from e
            except JSONParseError as e:
                logger.error("invalid_response", op=operation, error=str(e))
                raise PersistenceError(f"{operation} failed: invalid response body") from e

    def _decode_forest(self, serialized: str) -> list[Any]:
        return parse_forest_json(
            serialized, self.settings.max_forest_size, self.settings.max_tree_depth, self.settings.max_prop_depth
        )

    def close(self) -> None:
        """Close HTTP client"""
        self._client.close()

    def __enter__(self) -> "PersistenceClient":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def _rows(data: Any) -> list[Any]:
    if not isinstance(data, list):
        logger.error("invalid_response", type=type(data).__name__)
        raise PersistenceError(f"Expected a JSON array, got {type(data).__name__}")
    return data


def _parse(model, data: Any):
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise PersistenceError(f"Invalid {model.__name__} in response: {e}") from e


def _validated(model, **fields):
    try:
        return model(**fields)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid request: {e}") from e


def _error_text(response: httpx.Response) -> str:
    try:
        body = loads(response.content)
    except JSONParseError:
        return response.text
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return response.text
