"""Adapters - Concrete implementations of ports."""
from incapsula_manager.adapters.outbound import (
    ConsoleLogger,
    HttpxIncapsulaClient,
    JsonLogger,
    PolicyClient,
    SiteClient,
)

__all__ = [
    "ConsoleLogger",
    "HttpxIncapsulaClient",
    "JsonLogger",
    "PolicyClient",
    "SiteClient",
]
