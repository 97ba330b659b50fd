"""Domain layer for the Incapsula manager."""
from incapsula_manager.domain.entities import (
    AssociationState,
    PlannedResource,
    Policy,
    PolicyAssetAssociation,
    SiteAddResponse,
    SiteStatusResponse,
    SiteUpdateResponse,
)
from incapsula_manager.domain.value_objects import AssetType, PolicyType, ResultCode

__all__ = [
    "AssociationState",
    "PlannedResource",
    "Policy",
    "PolicyAssetAssociation",
    "SiteAddResponse",
    "SiteStatusResponse",
    "SiteUpdateResponse",
    "AssetType",
    "PolicyType",
    "ResultCode",
]
