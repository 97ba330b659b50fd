"""Factory functions wiring adapters from configuration.

The transport is the only resource that needs closing. It is built once with
`create_http_client` and owned by the caller, typically as a `with` block;
the API clients built on top of it only borrow it:

    with create_http_client(config, logger) as http:
        create_site_client(http, logger).site_status(domain, site_id)
"""
from incapsula_manager.config import IncapsulaConfig
from incapsula_manager.ports.outbound import HTTPClientPort, LoggerPort


def create_http_client(config: IncapsulaConfig, logger: LoggerPort):
    """
    Build the authenticated HTTP transport.

    Args:
        config: Credentials and base URLs (validated here)
        logger: Logger instance to use

    Returns:
        HttpxIncapsulaClient, usable as a context manager. The caller
        closes it.

    Raises:
        ConfigurationError: if credentials or base URLs are missing
    """
    from incapsula_manager.adapters.outbound import HttpxIncapsulaClient

    config.validate()
    return HttpxIncapsulaClient(config=config, logger=logger)


def create_site_client(http: HTTPClientPort, logger: LoggerPort):
    """Build a SiteClient on a transport the caller owns."""
    from incapsula_manager.adapters.outbound import SiteClient

    return SiteClient(http=http, logger=logger)


def create_policy_client(http: HTTPClientPort, logger: LoggerPort):
    """Build a PolicyClient on a transport the caller owns."""
    from incapsula_manager.adapters.outbound import PolicyClient

    return PolicyClient(http=http, logger=logger)


def create_association_resource(http: HTTPClientPort, logger: LoggerPort):
    """Build a PolicyAssetAssociationResource backed by a PolicyClient."""
    from incapsula_manager.application.association_service import PolicyAssetAssociationResource

    return PolicyAssetAssociationResource(client=create_policy_client(http, logger), logger=logger)
