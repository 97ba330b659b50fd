"""Outbound adapters - External services (Incapsula API, logging)."""
from incapsula_manager.adapters.outbound.console_logger import ConsoleLogger
from incapsula_manager.adapters.outbound.httpx_client import HttpxIncapsulaClient
from incapsula_manager.adapters.outbound.json_logger import JsonLogger
from incapsula_manager.adapters.outbound.policy_client import PolicyClient
from incapsula_manager.adapters.outbound.site_client import SiteClient

__all__ = [
    "ConsoleLogger",
    "HttpxIncapsulaClient",
    "JsonLogger",
    "PolicyClient",
    "SiteClient",
]
