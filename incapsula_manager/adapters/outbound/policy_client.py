"""Policy Client Adapter - Incapsula policies v2 API calls."""
import json

import httpx

from incapsula_manager.domain.entities import Policy, PolicyAssetAssociation
from incapsula_manager.domain.exceptions import DecodeError, RemoteRejectionError, TransportError
from incapsula_manager.ports.outbound import HTTPClientPort, LoggerPort

OPERATION_READ_POLICY = "ReadPolicy"
OPERATION_CREATE_ASSOCIATION = "CreatePolicyAssetAssociation"
OPERATION_READ_ASSOCIATION = "ReadPolicyAssetAssociation"
OPERATION_DELETE_ASSOCIATION = "DeletePolicyAssetAssociation"


def _account_params(account_id: int | None) -> dict[str, str]:
    return {"caid": str(account_id)} if account_id else {}


class PolicyClient:
    """
    Client for policies and policy asset associations.

    Implements PolicyLookupPort. Unlike the provisioning endpoints these
    calls report failure through the HTTP status code.
    """

    def __init__(self, http: HTTPClientPort, logger: LoggerPort):
        self._http = http
        self._logger = logger

    def _association_url(self, association: PolicyAssetAssociation) -> str:
        return (
            f"{self._http.base_url_api}/policies/v2/assets/{association.asset_type}/"
            f"{association.asset_id}/policies/{association.policy_id}"
        )

    def get_policy(self, policy_id: str, account_id: int | None = None) -> Policy:
        """
        Fetch a policy by id.

        Args:
            policy_id: Id of the policy
            account_id: Optional sub-account context

        Returns:
            The decoded Policy
        """
        self._logger.info(f"Getting Incapsula policy: {policy_id}", account_id=account_id)

        url = f"{self._http.base_url_api}/policies/v2/policies/{policy_id}"
        params = {"extended": "true", **_account_params(account_id)}
        try:
            response = self._http.get_with_headers(url, params, OPERATION_READ_POLICY)
        except TransportError as e:
            raise TransportError(f"Error getting policy {policy_id}: {e}") from e

        self._logger.debug("Incapsula get policy JSON response", body=response.text)
        if response.status_code != 200:
            raise RemoteRejectionError(
                f"Error status code {response.status_code} from Incapsula service "
                f"when reading policy {policy_id}: {response.text}",
                body=response.text,
                status_code=response.status_code,
            )

        try:
            payload = json.loads(response.text)
            if payload.get("isError"):
                raise RemoteRejectionError(
                    f"Error from Incapsula service when reading policy {policy_id}: {response.text}",
                    body=response.text,
                    status_code=response.status_code,
                )
            return Policy.from_dict(payload["value"])
        except (ValueError, TypeError, AttributeError, KeyError, OverflowError) as e:
            raise DecodeError(
                f"Error parsing policy JSON response for policy {policy_id}: {e}: {response.text}",
                body=response.text,
            ) from e

    def add_policy_asset_association(
        self, policy_id: str, asset_id: str, asset_type: str, account_id: int | None = None
    ) -> None:
        """Associate a policy with an asset."""
        association = PolicyAssetAssociation(policy_id, asset_id, asset_type, account_id)
        self._logger.info(
            "Adding Incapsula policy asset association",
            policy_id=policy_id,
            asset_id=asset_id,
            asset_type=asset_type,
        )
        response = self._request("POST", association, OPERATION_CREATE_ASSOCIATION)
        if response.status_code != 200:
            raise self._rejection("creating", association, response)

    def is_policy_asset_associated(
        self, policy_id: str, asset_id: str, asset_type: str, account_id: int | None = None
    ) -> bool:
        """
        Check whether an association exists.

        Returns:
            True on 200, False on 404

        Raises:
            RemoteRejectionError: for any other status
        """
        association = PolicyAssetAssociation(policy_id, asset_id, asset_type, account_id)
        response = self._request("GET", association, OPERATION_READ_ASSOCIATION)
        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        raise self._rejection("reading", association, response)

    def delete_policy_asset_association(
        self, policy_id: str, asset_id: str, asset_type: str, account_id: int | None = None
    ) -> None:
        """Remove an association."""
        association = PolicyAssetAssociation(policy_id, asset_id, asset_type, account_id)
        self._logger.info(
            "Deleting Incapsula policy asset association",
            policy_id=policy_id,
            asset_id=asset_id,
            asset_type=asset_type,
        )
        response = self._request("DELETE", association, OPERATION_DELETE_ASSOCIATION)
        if response.status_code != 200:
            raise self._rejection("deleting", association, response)

    def _request(
        self, method: str, association: PolicyAssetAssociation, operation: str
    ) -> httpx.Response:
        try:
            response = self._http.do_json_request_with_headers(
                method,
                self._association_url(association),
                None,
                operation,
                params=_account_params(association.account_id),
            )
        except TransportError as e:
            raise TransportError(f"Error {operation} for policy asset association {association}: {e}") from e
        self._logger.debug(f"Incapsula {operation} JSON response", body=response.text)
        return response

    @staticmethod
    def _rejection(
        action: str, association: PolicyAssetAssociation, response: httpx.Response
    ) -> RemoteRejectionError:
        return RemoteRejectionError(
            f"Error status code {response.status_code} from Incapsula service when {action} "
            f"policy asset association: policy ID ({association.policy_id}) - asset ID "
            f"({association.asset_id}) - asset type ({association.asset_type}): {response.text}",
            body=response.text,
            status_code=response.status_code,
        )
