"""Client configuration loaded from the environment.

Environment Variables:
    INCAPSULA_API_ID: API id of the Incapsula API key
    INCAPSULA_API_KEY: Secret of the Incapsula API key
    INCAPSULA_BASE_URL: Provisioning API base URL (sites/* endpoints)
    INCAPSULA_BASE_URL_API: API base URL (policies and certificates endpoints)
    INCAPSULA_TIMEOUT: HTTP timeout in seconds
    LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
"""
import os
from dataclasses import dataclass, replace
from typing import Mapping

from incapsula_manager.domain.exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://my.incapsula.com/api/prov/v1"
DEFAULT_BASE_URL_API = "https://api.imperva.com"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class IncapsulaConfig:
    """Settings shared by every Incapsula client."""

    api_id: str = ""
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    base_url_api: str = DEFAULT_BASE_URL_API
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "IncapsulaConfig":
        """
        Build a config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            IncapsulaConfig with defaults for anything unset
        """
        env = os.environ if environ is None else environ
        timeout_str = env.get("INCAPSULA_TIMEOUT", "").strip()
        try:
            timeout = float(timeout_str) if timeout_str else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(f"INCAPSULA_TIMEOUT must be a number, got {timeout_str!r}") from e

        return cls(
            api_id=env.get("INCAPSULA_API_ID", "").strip(),
            api_key=env.get("INCAPSULA_API_KEY", "").strip(),
            base_url=env.get("INCAPSULA_BASE_URL", "").strip().rstrip("/") or DEFAULT_BASE_URL,
            base_url_api=env.get("INCAPSULA_BASE_URL_API", "").strip().rstrip("/") or DEFAULT_BASE_URL_API,
            timeout=timeout,
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )

    def with_overrides(self, **overrides: str | float | None) -> "IncapsulaConfig":
        """Return a copy with every non-empty override applied."""
        changes = {k: v for k, v in overrides.items() if v not in (None, "")}
        for key in ("base_url", "base_url_api"):
            if key in changes:
                changes[key] = str(changes[key]).rstrip("/")
        return replace(self, **changes)

    def validate(self) -> None:
        """
        Check that credentials are present.

        Raises:
            ConfigurationError: if the API id or key is missing
        """
        missing = [name for name, value in (("api_id", self.api_id), ("api_key", self.api_key)) if not value]
        if missing:
            raise ConfigurationError(
                f"Missing Incapsula credentials: {', '.join(missing)} "
                "(set INCAPSULA_API_ID and INCAPSULA_API_KEY)"
            )

    def __repr__(self) -> str:
        return (
            f"IncapsulaConfig(api_id={self.api_id!r}, api_key='***', base_url={self.base_url!r}, "
            f"base_url_api={self.base_url_api!r}, timeout={self.timeout})"
        )
