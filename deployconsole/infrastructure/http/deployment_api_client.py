"""
Deployment API Client

Architectural Intent:
- Implements DeploymentClientPort over the orchestration REST API
- Raises TransportError/ServerError internally and converts both to a
  Failure outcome at the boundary of every public operation
- Holds no deployment state; one httpx.AsyncClient is reused for all calls

API Surface (relative to ApiConfig.base_url):
    GET    /deployments/{ns}                         -> list
    GET    /deployments/{ns}/{name}                  -> get
    POST   /deployments/{ns}                         -> create (JSON resource document)
    POST   /deployments/{ns}/{name}/scale?replicas=n -> scale
    DELETE /deployments/{ns}/{name}                  -> delete
    GET    /pods/{ns}                                -> pods
"""

from __future__ import annotations
from typing import Any, Callable, Optional
from urllib.parse import quote
import logging

import httpx

from deployconsole.domain.entities.deployment import Deployment, DeploymentSpec
from deployconsole.domain.entities.pod import Pod
from deployconsole.domain.exceptions import (
    DeploymentClientError,
    ServerError,
    TransportError,
)
from deployconsole.domain.value_objects.outcome import Failure, Outcome, Success
from deployconsole.infrastructure.config import ApiConfig
from deployconsole.infrastructure.logging import request_context
from deployconsole.infrastructure.telemetry.otel_exporter import OTELExporter

logger = logging.getLogger(__name__)

LIST_FAILED = "Failed to fetch deployments"
GET_FAILED = "Failed to fetch deployment"
CREATE_FAILED = "Failed to create deployment"
SCALE_FAILED = "Failed to scale deployment"
DELETE_FAILED = "Failed to delete deployment"
PODS_FAILED = "Failed to fetch pods"


def _segment(value: str) -> str:
    return quote(value, safe="")


def _error_message(response: httpx.Response) -> Optional[str]:
    """Return the "error" field of a JSON error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error:
            return error
    return None


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _parse_deployment_list(response: httpx.Response) -> tuple[Deployment, ...]:
    try:
        body = response.json()
    except ValueError as e:
        raise TransportError(f"Deployment list is not valid JSON: {e}") from e
    if not isinstance(body, list):
        raise TransportError(
            f"Deployment list must be a JSON array, got {type(body).__name__}"
        )
    try:
        return tuple(Deployment.from_dict(entry) for entry in body)
    except ValueError as e:
        raise TransportError(str(e)) from e


def _parse_pod_list(response: httpx.Response) -> tuple[Pod, ...]:
    try:
        body = response.json()
    except ValueError as e:
        raise TransportError(f"Pod list is not valid JSON: {e}") from e
    if not isinstance(body, list):
        raise TransportError(f"Pod list must be a JSON array, got {type(body).__name__}")
    try:
        return tuple(Pod.from_dict(entry) for entry in body)
    except ValueError as e:
        raise TransportError(str(e)) from e


def _parse_document(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError as e:
        raise TransportError(f"Deployment is not valid JSON: {e}") from e
    if not isinstance(body, dict):
        raise TransportError("Deployment must be a JSON object")
    return body


class HttpDeploymentClient:
    """Orchestration API client for one base URL."""

    def __init__(
        self,
        config: ApiConfig,
        telemetry: Optional[OTELExporter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self._telemetry = telemetry or OTELExporter()
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds or None,
            transport=transport,
            headers={"accept": "application/json"},
        )

    async def __aenter__(self) -> "HttpDeploymentClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ---- operations --------------------------------------------------------

    async def list_deployments(self, namespace: str) -> Outcome:
        logger.info("Listing deployments in namespace: %s", namespace)
        return await self._execute(
            "list",
            namespace,
            "GET",
            f"/deployments/{_segment(namespace)}",
            LIST_FAILED,
            parse=_parse_deployment_list,
        )

    async def get_deployment(self, namespace: str, name: str) -> Outcome:
        logger.info("Getting deployment %s in namespace: %s", name, namespace)
        return await self._execute(
            "get",
            namespace,
            "GET",
            f"/deployments/{_segment(namespace)}/{_segment(name)}",
            GET_FAILED,
            parse=_parse_document,
        )

    async def create_deployment(self, namespace: str, spec: DeploymentSpec) -> Outcome:
        logger.info("Creating deployment %s in namespace: %s", spec.name, namespace)
        return await self._execute(
            "create",
            namespace,
            "POST",
            f"/deployments/{_segment(namespace)}",
            CREATE_FAILED,
            parse=_json_or_none,
            use_server_message=True,
            json=spec.to_manifest(),
        )

    async def scale_deployment(
        self, namespace: str, name: str, target_replicas: int
    ) -> Outcome:
        logger.info(
            "Scaling deployment %s to %d replicas in namespace: %s",
            name,
            target_replicas,
            namespace,
        )
        return await self._execute(
            "scale",
            namespace,
            "POST",
            f"/deployments/{_segment(namespace)}/{_segment(name)}/scale",
            SCALE_FAILED,
            params={"replicas": str(target_replicas)},
        )

    async def delete_deployment(self, namespace: str, name: str) -> Outcome:
        logger.info("Deleting deployment %s in namespace: %s", name, namespace)
        return await self._execute(
            "delete",
            namespace,
            "DELETE",
            f"/deployments/{_segment(namespace)}/{_segment(name)}",
            DELETE_FAILED,
        )

    async def list_pods(self, namespace: str) -> Outcome:
        logger.info("Listing pods in namespace: %s", namespace)
        return await self._execute(
            "pods",
            namespace,
            "GET",
            f"/pods/{_segment(namespace)}",
            PODS_FAILED,
            parse=_parse_pod_list,
        )

    # ---- helpers -----------------------------------------------------------

    async def _execute(
        self,
        operation: str,
        namespace: str,
        method: str,
        path: str,
        failure_reason: str,
        parse: Optional[Callable[[httpx.Response], Any]] = None,
        use_server_message: bool = False,
        **kwargs: Any,
    ) -> Outcome:
        """Issue one request and convert its result into an Outcome."""
        attributes = {"http.method": method, "deployconsole.namespace": namespace}
        with self._telemetry.span(f"deployments.{operation}", attributes) as span:
            try:
                response = await self._send(method, path, use_server_message, **kwargs)
                payload = parse(response) if parse else None
            except DeploymentClientError as e:
                reason = failure_reason
                if use_server_message and isinstance(e, ServerError) and e.message:
                    reason = e.message
                status_code = e.status_code if isinstance(e, ServerError) else None
                logger.warning(
                    "%s %s failed: %s",
                    method,
                    path,
                    e,
                    extra=request_context(operation, namespace, status_code),
                )
                self._telemetry.mark_failed(span, str(e))
                self._telemetry.record_request(operation, "failure", namespace)
                return Failure(reason)

        logger.debug(
            "%s %s -> %d",
            method,
            path,
            response.status_code,
            extra=request_context(operation, namespace, response.status_code),
        )
        self._telemetry.record_request(operation, "success", namespace)
        return Success(payload)

    async def _send(
        self, method: str, path: str, read_error_body: bool, **kwargs: Any
    ) -> httpx.Response:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            message = _error_message(response) if read_error_body else None
            raise ServerError(response.status_code, message)
        return response
