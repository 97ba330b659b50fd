"""Uniqueness validator - at most one WAF_RULES policy per asset in a plan."""
from typing import Iterable

from incapsula_manager.domain.entities import PlannedResource, Policy
from incapsula_manager.domain.exceptions import PolicyConflictError
from incapsula_manager.ports.outbound import LoggerPort, PolicyLookupPort


def validate_unique_waf_assets(
    planned_resources: Iterable[PlannedResource] | None,
    policy_lookup: PolicyLookupPort,
    logger: LoggerPort,
    account_id: int | None = None,
) -> None:
    """
    Reject plans that give an asset more than one WAF_RULES policy.

    Every planned policy_asset_association is resolved to its policy; for
    WAF_RULES policies the asset id must not have been seen before. Other
    policy types and other resource types are not constrained. Associations
    whose policy or asset id is not known yet are skipped.

    Args:
        planned_resources: Finalised planned configurations, or None when
            there is no plan yet
        policy_lookup: Resolves a policy id to its Policy
        logger: Logger for operation logging
        account_id: Account context for policy lookups

    Raises:
        PolicyConflictError: on the first asset seen twice
        Exception: whatever the policy lookup raises
    """
    if planned_resources is None:
        logger.debug("No plan to validate")
        return

    policies: dict[str, Policy] = {}
    seen_assets: set[str] = set()

    for resource in planned_resources:
        if not resource.is_policy_asset_association():
            continue

        policy_id = resource.get("policy_id")
        asset_id = resource.get("asset_id")
        if policy_id in (None, "") or asset_id in (None, ""):
            # Not yet known at plan time
            logger.debug(
                "Skipping association with unknown policy or asset",
                resource=resource.address,
                policy_id=policy_id,
                asset_id=asset_id,
            )
            continue
        policy_id = str(policy_id)
        asset_id = str(asset_id)

        if policy_id not in policies:
            try:
                policies[policy_id] = policy_lookup.get_policy(policy_id, account_id)
            except Exception as e:
                logger.error(f"Could not get Incapsula policy: {policy_id}", exception=e)
                raise

        policy = policies[policy_id]
        if not policy.is_unique_per_asset():
            continue

        if asset_id in seen_assets:
            logger.error(
                f"Asset {asset_id} has more than one WAF policy assigned",
                resource=resource.address,
                policy_id=policy_id,
            )
            raise PolicyConflictError(asset_id)
        seen_assets.add(asset_id)

    logger.debug(f"Plan validated: {len(seen_assets)} assets with a WAF policy")
