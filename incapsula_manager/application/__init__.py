"""Application layer - Resource lifecycle and plan validation."""
from incapsula_manager.application.association_service import (
    PolicyAssetAssociationResource,
    resolve_account_id,
)
from incapsula_manager.application.factories import (
    create_association_resource,
    create_http_client,
    create_policy_client,
    create_site_client,
)
from incapsula_manager.application.uniqueness_validator import validate_unique_waf_assets

__all__ = [
    "PolicyAssetAssociationResource",
    "resolve_account_id",
    "validate_unique_waf_assets",
    "create_association_resource",
    "create_http_client",
    "create_policy_client",
    "create_site_client",
]
