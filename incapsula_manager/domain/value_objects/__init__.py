"""Value objects for the Incapsula manager domain."""
from incapsula_manager.domain.value_objects.asset_type import AssetType, PolicyType
from incapsula_manager.domain.value_objects.result_code import ResultCode

__all__ = ["AssetType", "PolicyType", "ResultCode"]
