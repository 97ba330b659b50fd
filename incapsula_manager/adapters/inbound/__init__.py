"""Inbound adapters - CLI and plan input."""
