"""Rate-limited client for the CRPT document registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from .cancellation import CancellationToken
from .config import ApiConfig
from .rate_limiter import RateBudget, RateLimiter
from .serializer import JsonSerializer, Serializer
from .transport import RequestsTransport, Response, Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionRequest:
    """A single outbound request, built per call and discarded afterwards."""

    endpoint: str
    payload: bytes
    headers: dict[str, str] = field(default_factory=dict)


class DocumentClient:
    """Submits documents to the registry without exceeding the rate budget.

    One instance may be shared by any number of threads. The rate limiter is
    its only mutable state; encoding and network calls happen outside the
    limiter's lock.

    Example:

        with DocumentClient(timedelta(seconds=10), 2) as client:
            response = client.submit_document(document, "signature")
    """

    def __init__(
        self,
        time_limit: timedelta | float,
        request_limit: int,
        *,
        config: ApiConfig | None = None,
        transport: Transport | None = None,
        serializer: Serializer | None = None,
        rate_limiter: RateLimiter | None = None,
    ):
        """
        Initialize the client.

        Args:
            time_limit: Length of the rate-limit window (timedelta or seconds)
            request_limit: Maximum number of submissions per window
            config: API location (default: ApiConfig())
            transport: HTTP transport (default: RequestsTransport)
            serializer: Document encoder (default: JsonSerializer)
            rate_limiter: Pre-built limiter to share between clients; its budget
                must match time_limit and request_limit
        """
        budget = RateBudget.from_timedelta(time_limit, request_limit)
        if rate_limiter is not None and rate_limiter.budget != budget:
            raise ValueError(
                f"rate_limiter budget {rate_limiter.budget} does not match {budget}"
            )
        self.config = config or ApiConfig()
        self.rate_limiter = rate_limiter or RateLimiter(budget)
        self.budget = self.rate_limiter.budget
        self.serializer = serializer or JsonSerializer()
        self._owns_transport = transport is None
        self.transport = transport or RequestsTransport(timeout=self.config.timeout)

    def build_request(self, payload: bytes, signature: str) -> SubmissionRequest:
        return SubmissionRequest(
            endpoint=self.config.documents_create_url,
            payload=payload,
            headers={"Signature": signature},
        )

    def submit_document(
        self,
        document: Any,
        signature: str,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> Response:
        """
        Create a document in the registry.

        Waits for a rate-limit slot, encodes the document and posts it with
        the signature header. The response is returned whatever its status
        code; a consumed slot is not returned if a later step fails.

        Args:
            document: Document to submit (usually a crpt_api.models.Document)
            signature: Document signature sent in the Signature header
            cancel_token: Token that abandons the wait for a slot

        Returns:
            Response from the registry

        Raises:
            Cancelled: If the wait for a slot was cancelled
            SerializationError: If the document cannot be encoded
            TransportError: If the request failed at the network level
        """
        if not isinstance(signature, str) or not signature:
            raise ValueError("signature must be a non-empty string")

        self.rate_limiter.acquire(cancel_token)
        payload = self.serializer.encode(document)
        request = self.build_request(payload, signature)
        logger.info("Submitting document to %s (%d bytes)", request.endpoint, len(payload))
        response = self.transport.post(request.endpoint, request.payload, request.headers)
        logger.info("Registry answered %s", response.status_code)
        return response

    def close(self) -> None:
        """Close the transport if this client created it."""

        if self._owns_transport:
            close = getattr(self.transport, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> "DocumentClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
