"""Outbound ports - Interfaces for driven adapters."""
from incapsula_manager.ports.outbound.http_client_port import HTTPClientPort
from incapsula_manager.ports.outbound.logger_port import LoggerPort
from incapsula_manager.ports.outbound.policy_association_port import PolicyAssociationPort
from incapsula_manager.ports.outbound.policy_lookup_port import PolicyLookupPort

__all__ = ["HTTPClientPort", "LoggerPort", "PolicyAssociationPort", "PolicyLookupPort"]
