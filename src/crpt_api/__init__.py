"""CRPT API client - rate-limited submission of documents to the registry."""

__version__ = "1.0.0"

from .cancellation import CancellationToken
from .client import DocumentClient, SubmissionRequest
from .config import ApiConfig
from .errors import Cancelled, CrptApiError, SerializationError, TransportError
from .models import Description, Document, Product, sample_document
from .rate_limiter import RateBudget, RateLimiter
from .serializer import JsonSerializer, Serializer
from .session import create_session
from .transport import RequestsTransport, Response, SubmissionResult, Transport

__all__ = [
    "ApiConfig",
    "CancellationToken",
    "Cancelled",
    "CrptApiError",
    "Description",
    "Document",
    "DocumentClient",
    "JsonSerializer",
    "Product",
    "RateBudget",
    "RateLimiter",
    "RequestsTransport",
    "Response",
    "SerializationError",
    "Serializer",
    "SubmissionRequest",
    "SubmissionResult",
    "Transport",
    "TransportError",
    "create_session",
    "sample_document",
]
