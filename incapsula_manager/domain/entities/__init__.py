"""Domain entities for the Incapsula manager."""
from incapsula_manager.domain.entities.certificate import (
    PENDING_USER_ACTION,
    CertificateCheckResponse,
    CertificateData,
    SanEntry,
)
from incapsula_manager.domain.entities.planned_resource import (
    POLICY_ASSET_ASSOCIATION_TYPE,
    PlannedResource,
)
from incapsula_manager.domain.entities.policy import Policy
from incapsula_manager.domain.entities.policy_asset_association import (
    AssociationState,
    PolicyAssetAssociation,
)
from incapsula_manager.domain.entities.site import (
    AclRule,
    DNSRecord,
    RuleException,
    SiteAddResponse,
    SiteDeleteResponse,
    SiteStatusResponse,
    SiteUpdateResponse,
    WafRule,
)

__all__ = [
    "PENDING_USER_ACTION",
    "POLICY_ASSET_ASSOCIATION_TYPE",
    "AclRule",
    "AssociationState",
    "CertificateCheckResponse",
    "CertificateData",
    "DNSRecord",
    "PlannedResource",
    "Policy",
    "PolicyAssetAssociation",
    "RuleException",
    "SanEntry",
    "SiteAddResponse",
    "SiteDeleteResponse",
    "SiteStatusResponse",
    "SiteUpdateResponse",
    "WafRule",
]
