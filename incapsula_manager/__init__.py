"""Incapsula Manager - Sites and policy asset associations.

Client and resource layer for the Incapsula WAF/CDN API, used by a
declarative infrastructure tool to manage sites and policy associations.
"""

__version__ = "0.1.0"

# Application layer
from incapsula_manager.application import (
    PolicyAssetAssociationResource,
    create_association_resource,
    create_policy_client,
    create_site_client,
    validate_unique_waf_assets,
)
from incapsula_manager.config import IncapsulaConfig
from incapsula_manager.domain import (
    AssetType,
    AssociationState,
    PlannedResource,
    Policy,
    PolicyAssetAssociation,
    PolicyType,
    ResultCode,
    SiteStatusResponse,
)

__all__ = [
    "__version__",
    "IncapsulaConfig",
    # Domain
    "AssetType",
    "AssociationState",
    "PlannedResource",
    "Policy",
    "PolicyAssetAssociation",
    "PolicyType",
    "ResultCode",
    "SiteStatusResponse",
    # Application
    "PolicyAssetAssociationResource",
    "create_association_resource",
    "create_policy_client",
    "create_site_client",
    "validate_unique_waf_assets",
]
