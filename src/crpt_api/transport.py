"""HTTP transport capability used by the document client."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

import requests

from .errors import TransportError
from .session import create_session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Response:
    """Status, body and headers of an HTTP response, passed through verbatim."""

    status_code: int
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", dict(self.headers))

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body)


SubmissionResult = Response


class Transport(Protocol):
    """Anything that can perform the POST and GET requests the client needs."""

    def post(self, uri: str, body: bytes, headers: Mapping[str, str]) -> Response:
        ...

    def get(self, uri: str, headers: Mapping[str, str]) -> Response:
        ...


class RequestsTransport:
    """:class:`Transport` implementation backed by a ``requests.Session``.

    Status codes are never interpreted: a 3xx, 4xx or 5xx answer is returned
    like any other response and redirects are not followed. Network failures
    are raised as :class:`TransportError`.
    """

    def __init__(self, session: requests.Session | None = None, timeout: float = 60.0):
        self._owns_session = session is None
        self.session = session or create_session()
        self.timeout = timeout

    def post(self, uri: str, body: bytes, headers: Mapping[str, str]) -> Response:
        request_headers = {"Content-Type": "application/json"}
        request_headers.update(headers or {})
        return self._send("POST", uri, data=body, headers=request_headers)

    def get(self, uri: str, headers: Mapping[str, str]) -> Response:
        return self._send("GET", uri, headers=dict(headers or {}))

    def _send(self, method: str, uri: str, **kwargs: Any) -> Response:
        try:
            response = self.session.request(
                method, uri, timeout=self.timeout, allow_redirects=False, **kwargs
            )
        except requests.RequestException as exc:
            logger.debug("%s %s failed: %s", method, uri, exc)
            raise TransportError(f"{method} {uri} failed: {exc}", uri=uri) from exc
        logger.debug("%s %s -> %s", method, uri, response.status_code)
        return Response(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        """Close the underlying session if this transport created it."""

        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
