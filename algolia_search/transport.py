"""Request dispatcher with sequential host failover."""

import json
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import httpx

from .exceptions import ErrorKind, ProgrammingError, ServiceError

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")
BODY_METHODS = ("POST", "PUT")
JSON_CONTENT_TYPE = "application/json; charset=UTF-8"
DEFAULT_BACKEND_MESSAGE = "Error detected in backend"


@dataclass
class TimeoutBudget:
    """Timeouts in milliseconds, read by each call when it starts."""

    connect_ms: int = 2000
    socket_ms: int = 30000
    search_ms: int = 5000

    def socket_timeout_for(self, search: bool) -> int:
        return self.search_ms if search else self.socket_ms

    def snapshot(self) -> "TimeoutBudget":
        return replace(self)


class OutcomeKind(Enum):
    """Classification of a single host attempt."""

    SUCCESS = "success"
    TERMINAL = "terminal"
    RETRYABLE = "retryable"


@dataclass(frozen=True)
class RequestOutcome:
    """Result of one host attempt.

    SUCCESS carries the decoded document, TERMINAL the error message to
    raise, RETRYABLE the diagnostic recorded against the host.
    """

    kind: OutcomeKind
    document: Optional[Dict[str, Any]] = None
    message: str = ""
    status_code: Optional[int] = None

    @classmethod
    def success(cls, document: Dict[str, Any], status_code: int) -> "RequestOutcome":
        return cls(OutcomeKind.SUCCESS, document=document, status_code=status_code)

    @classmethod
    def terminal(cls, message: str, status_code: int) -> "RequestOutcome":
        return cls(OutcomeKind.TERMINAL, message=message, status_code=status_code)

    @classmethod
    def retryable(
        cls, diagnostic: str, status_code: Optional[int] = None
    ) -> "RequestOutcome":
        return cls(OutcomeKind.RETRYABLE, message=diagnostic, status_code=status_code)


def _describe(error: Exception) -> str:
    return f"{type(error).__name__}={error}"


def _decode_object(raw: bytes) -> Dict[str, Any]:
    document = json.loads(raw)
    if not isinstance(document, dict):
        raise ValueError(
            f"expected a JSON object, got {type(document).__name__}"
        )
    return document


class RequestDispatcher:
    """Sends a request to each host in turn until one answers.

    Transport errors and non 2xx/4xx statuses move on to the next host. A 4xx
    response or an undecodable 2xx body stops immediately, since every host
    would answer the same way.
    """

    def __init__(self, http_client: httpx.Client) -> None:
        """Initialize dispatcher.

        Args:
            http_client: Shared HTTP client; it is never reconfigured per call
        """
        self.http_client = http_client

    def dispatch(
        self,
        method: str,
        path: str,
        body: Optional[Any] = None,
        *,
        hosts: Sequence[str],
        connect_timeout_ms: int,
        socket_timeout_ms: int,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """Execute a request with host failover.

        Args:
            method: HTTP verb (GET, POST, PUT or DELETE)
            path: Request path, including any query string
            body: JSON-serializable request body
            hosts: Hosts in attempt order
            connect_timeout_ms: Connect timeout
            socket_timeout_ms: Read/write timeout
            headers: Headers sent with every attempt

        Returns:
            Decoded JSON object

        Raises:
            ProgrammingError: If the verb is unsupported or cannot carry a body
            ServiceError: If the request is rejected or every host fails
        """
        verb = self._resolve_method(method, body)

        request_headers = dict(headers or {})
        content = None
        if body is not None:
            content = json.dumps(body, ensure_ascii=False).encode("utf-8")
            request_headers["Content-Type"] = JSON_CONTENT_TYPE

        timeout = httpx.Timeout(
            socket_timeout_ms / 1000.0,
            connect=connect_timeout_ms / 1000.0,
        )

        diagnostics: List[Tuple[str, str]] = []
        for host in hosts:
            url = f"https://{host}{path}"
            logger.debug(f"{verb} {url}")
            outcome = self._attempt(verb, url, content, request_headers, timeout)

            if outcome.kind is OutcomeKind.SUCCESS:
                return outcome.document
            if outcome.kind is OutcomeKind.TERMINAL:
                raise ServiceError(
                    outcome.message,
                    kind=ErrorKind.TERMINAL,
                    status_code=outcome.status_code,
                    diagnostics=diagnostics,
                )

            logger.warning(f"Host {host} failed, trying next host: {outcome.message}")
            diagnostics.append((host, outcome.message))

        message = "Hosts unreachable: " + ", ".join(
            f"{host}={detail}" for host, detail in diagnostics
        )
        logger.error(message)
        raise ServiceError(
            message,
            kind=ErrorKind.AGGREGATED,
            diagnostics=diagnostics,
        )

    def _resolve_method(self, method: Any, body: Optional[Any]) -> str:
        verb = method.upper() if isinstance(method, str) else None
        if verb not in SUPPORTED_METHODS:
            raise ProgrammingError(f"Method {method} is not supported")
        if body is not None and verb not in BODY_METHODS:
            raise ProgrammingError(f"Method {verb} cannot enclose entity")
        return verb

    def _attempt(
        self,
        method: str,
        url: str,
        content: Optional[bytes],
        headers: Dict[str, str],
        timeout: httpx.Timeout,
    ) -> RequestOutcome:
        request = self.http_client.build_request(
            method, url, content=content, headers=headers, timeout=timeout
        )
        try:
            response = self.http_client.send(request, stream=True)
        except httpx.TransportError as e:
            return RequestOutcome.retryable(_describe(e))

        try:
            return self._classify(response)
        finally:
            response.close()

    def _classify(self, response: httpx.Response) -> RequestOutcome:
        status = response.status_code
        family = status // 100

        try:
            raw = response.read()
        except (httpx.TransportError, httpx.DecodingError, httpx.StreamError) as e:
            if family in (2, 4):
                return RequestOutcome.retryable(_describe(e), status)
            return RequestOutcome.retryable(str(status), status)

        if family == 2:
            try:
                return RequestOutcome.success(_decode_object(raw), status)
            except ValueError as e:
                return RequestOutcome.terminal(f"JSON decode error: {e}", status)

        if family == 4:
            try:
                document = _decode_object(raw)
            except ValueError as e:
                return RequestOutcome.terminal(f"JSON decode error: {e}", status)
            message = document.get("message", DEFAULT_BACKEND_MESSAGE)
            return RequestOutcome.terminal(str(message), status)

        return RequestOutcome.retryable(response.text, status)


__all__ = [
    "OutcomeKind",
    "RequestDispatcher",
    "RequestOutcome",
    "TimeoutBudget",
]
