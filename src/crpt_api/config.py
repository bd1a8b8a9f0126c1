"""Process-wide configuration for the CRPT API client."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_HOST = "ismp.crpt.ru"
DEFAULT_VERSION = "3"
DOCUMENTS_CREATE_PATH = "/lk/documents/create"


@dataclass(frozen=True)
class ApiConfig:
    """Location of the registry API. Created once and never changed."""

    host: str = DEFAULT_HOST
    version: str = DEFAULT_VERSION
    scheme: str = "https"
    timeout: float = 60.0

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("host must not be empty")
        if self.scheme not in ("http", "https"):
            raise ValueError(f"Unsupported scheme: {self.scheme!r}")
        if self.timeout <= 0:
            raise ValueError("timeout must be greater than zero")

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}/api/v{self.version}"

    @property
    def documents_create_url(self) -> str:
        return self.base_url + DOCUMENTS_CREATE_PATH

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ApiConfig":
        """
        Build a configuration from CRPT_API_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            ApiConfig with defaults for any variable that is not set
        """
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("CRPT_API_HOST") or DEFAULT_HOST,
            version=env.get("CRPT_API_VERSION") or DEFAULT_VERSION,
            scheme=env.get("CRPT_API_SCHEME") or "https",
            timeout=float(env.get("CRPT_API_TIMEOUT") or 60.0),
        )
