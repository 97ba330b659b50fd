"""Ports - Abstract interfaces for external dependencies."""
from incapsula_manager.ports.outbound import (
    HTTPClientPort,
    LoggerPort,
    PolicyAssociationPort,
    PolicyLookupPort,
)

__all__ = ["HTTPClientPort", "LoggerPort", "PolicyAssociationPort", "PolicyLookupPort"]
