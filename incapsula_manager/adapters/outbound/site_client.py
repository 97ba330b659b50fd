"""Site Client Adapter - Incapsula provisioning API calls for sites."""
import json
from typing import Any, Callable, TypeVar

import httpx

from incapsula_manager.domain.entities import (
    CertificateCheckResponse,
    SiteAddResponse,
    SiteDeleteResponse,
    SiteStatusResponse,
    SiteUpdateResponse,
)
from incapsula_manager.domain.exceptions import (
    DecodeError,
    RemoteRejectionError,
    SiteStatusError,
    TransportError,
)
from incapsula_manager.ports.outbound import HTTPClientPort, LoggerPort

ENDPOINT_SITE_ADD = "sites/add"
ENDPOINT_SITE_STATUS = "sites/status"
ENDPOINT_SITE_UPDATE = "sites/configure"
ENDPOINT_SITE_DELETE = "sites/delete"
ENDPOINT_CERT_DETAILS = "certificates-ui/v3/certificates"

OPERATION_CREATE_SITE = "CreateSite"
OPERATION_READ_SITE = "ReadSite"
OPERATION_UPDATE_SITE = "UpdateSite"
OPERATION_DELETE_SITE = "DeleteSite"

# Configuring domain_validation answers res=1 while a wildcard certificate
# that already covers the site is being reused.
DOMAIN_VALIDATION_PARAM = "domain_validation"
WILDCARD_REUSE_RES = "1"

DDOS_RULE_ID = "api.threats.ddos"

T = TypeVar("T")


def _bool_value(value: bool) -> str:
    return "true" if value else "false"


class SiteClient:
    """
    Client for the Incapsula site provisioning endpoints.

    Each call posts a form, decodes the JSON answer and checks the `res`
    result code. Failures raise with the domain or site id and the raw
    response body in the message; nothing is retried.
    """

    def __init__(self, http: HTTPClientPort, logger: LoggerPort):
        """
        Initialize the site client.

        Args:
            http: Authenticated HTTP transport
            logger: Logger for operation logging
        """
        self._http = http
        self._logger = logger

    def _url(self, endpoint: str) -> str:
        return f"{self._http.base_url}/{endpoint}"

    def _decode(self, response: httpx.Response, factory: Callable[[dict], T], context: str) -> T:
        """Parse a response body with `factory`, raising DecodeError on bad JSON or shape."""
        body = response.text
        try:
            payload = json.loads(body)
            if not isinstance(payload, dict):
                raise TypeError(f"expected a JSON object, got {type(payload).__name__}")
            return factory(payload)
        except (ValueError, TypeError, AttributeError, OverflowError) as e:
            raise DecodeError(f"Error parsing {context}: {e}: {body}", body=body) from e

    def add_site(
        self,
        domain: str,
        ref_id: str = "",
        send_site_setup_emails: str = "",
        site_ip: str = "",
        force_ssl: str = "",
        account_id: int = 0,
        naked_domain_san: bool = False,
        wildcard_san: bool = False,
        logs_account_id: str = "",
    ) -> SiteAddResponse:
        """
        Add a site to be managed by Incapsula.

        Args:
            domain: Domain of the site
            ref_id: Customer reference id
            send_site_setup_emails: "true"/"false" to send setup emails
            site_ip: Origin server IP or CNAME
            force_ssl: "true"/"false" to force SSL towards the origin
            account_id: Sub-account to create the site in (0 for the API key's account)
            naked_domain_san: Add the naked domain to the certificate SANs
            wildcard_san: Use a wildcard SAN instead of the full domain
            logs_account_id: Account that receives the site's logs

        Returns:
            SiteAddResponse with the new site id
        """
        self._logger.info(f"Adding Incapsula site for domain: {domain}", account_id=account_id)

        values = {
            "domain": domain,
            "ref_id": ref_id,
            "send_site_setup_emails": send_site_setup_emails,
            "site_ip": site_ip,
            "force_ssl": force_ssl,
            "naked_domain_san": _bool_value(naked_domain_san),
            "wildcard_san": _bool_value(wildcard_san),
            "logs_account_id": logs_account_id,
        }
        if account_id:
            values["account_id"] = str(account_id)

        try:
            response = self._http.post_form_with_headers(
                self._url(ENDPOINT_SITE_ADD), values, OPERATION_CREATE_SITE
            )
        except TransportError as e:
            raise TransportError(f"Error adding site for domain {domain}: {e}") from e

        self._logger.debug("Incapsula add site JSON response", body=response.text)
        add_response = self._decode(
            response, SiteAddResponse.from_dict, f"add site JSON response for domain {domain}"
        )

        if not add_response.res.is_success:
            raise RemoteRejectionError(
                f"Error from Incapsula service when adding site for domain {domain}: {response.text}",
                body=response.text,
                status_code=response.status_code,
            )

        self._logger.info(f"Added Incapsula site {add_response.site_id} for domain: {domain}")
        return add_response

    def site_status(self, domain: str, site_id: int) -> SiteStatusResponse:
        """
        Get the status of a managed site.

        Args:
            domain: Domain of the site (used for messages)
            site_id: Id of the site

        Returns:
            SiteStatusResponse

        Raises:
            SiteStatusError: on a non-zero result code; `error.response`
                holds the decoded response
        """
        self._logger.info(f"Getting Incapsula site status for domain: {domain}", site_id=site_id)

        try:
            response = self._http.post_form_with_headers(
                self._url(ENDPOINT_SITE_STATUS), {"site_id": str(site_id)}, OPERATION_READ_SITE
            )
        except TransportError as e:
            raise TransportError(
                f"Error getting site status for domain {domain} (site id: {site_id}): {e}"
            ) from e

        self._logger.debug("Incapsula site status JSON response", body=response.text)
        status_response = self._decode(
            response,
            SiteStatusResponse.from_dict,
            f"site status JSON response for domain {domain} (site id: {site_id})",
        )

        if not status_response.res.is_success:
            raise SiteStatusError(
                f"Error from Incapsula service when getting site status for domain {domain} "
                f"(site id: {site_id}): {response.text}",
                body=response.text,
                response=status_response,
            )

        return status_response

    def update_site(self, site_id: str, param: str, value: str) -> SiteUpdateResponse:
        """
        Update a single parameter on a site.

        A `domain_validation` update can answer res=1 while a wildcard
        certificate is being reused. In that case the site's certificate
        SANs are checked, and if any SAN is past PENDING_USER_ACTION the
        update is treated as successful.

        Args:
            site_id: Id of the site
            param: Name of the parameter to configure
            value: New value

        Returns:
            SiteUpdateResponse
        """
        self._logger.info(f"Updating Incapsula site for siteID: {site_id}", param=param)

        values = {"site_id": str(site_id), "param": param, "value": value}
        try:
            response = self._http.post_form_with_headers(
                self._url(ENDPOINT_SITE_UPDATE), values, OPERATION_UPDATE_SITE
            )
        except TransportError as e:
            raise TransportError(
                f"Error updating param ({param}) with value ({value}) on site_id: {site_id}: {e}"
            ) from e

        self._logger.debug("Incapsula update site JSON response", body=response.text)
        update_response = self._decode(
            response, SiteUpdateResponse.from_dict, f"update site JSON response for siteID {site_id}"
        )

        if update_response.res.is_success:
            return update_response

        if update_response.res == WILDCARD_REUSE_RES and param == DOMAIN_VALIDATION_PARAM:
            if self._has_validated_certificate(str(site_id)):
                self._logger.info(
                    f"Site {site_id} already has a validated certificate, ignoring result code 1",
                    param=param,
                )
                return update_response

        raise RemoteRejectionError(
            f"Error from Incapsula service when updating site for siteID {site_id} "
            f"(param: {param}): {response.text}",
            body=response.text,
            status_code=response.status_code,
        )

    def _has_validated_certificate(self, site_id: str) -> bool:
        """Check the site's certificates for a SAN that is no longer pending."""
        url = f"{self._http.base_url_api}/{ENDPOINT_CERT_DETAILS}"
        try:
            response = self._http.get_with_headers(url, {"extSiteId": site_id}, OPERATION_UPDATE_SITE)
        except TransportError as e:
            raise TransportError(f"Error checking certificate on site_id: {site_id}: {e}") from e

        self._logger.debug("Incapsula check certificate JSON response", body=response.text)
        check = self._decode(
            response,
            CertificateCheckResponse.from_dict,
            f"check certificate JSON response for siteID {site_id}",
        )
        return check.has_validated_san()

    def delete_site(self, domain: str, site_id: int) -> None:
        """
        Delete a site, skipping the grace period.

        Args:
            domain: Domain of the site (used for messages)
            site_id: Id of the site
        """
        self._logger.info(f"Deleting Incapsula site for domain: {domain}", site_id=site_id)

        values = {"site_id": str(site_id), "ignore_grace_period": "true"}
        try:
            response = self._http.post_form_with_headers(
                self._url(ENDPOINT_SITE_DELETE), values, OPERATION_DELETE_SITE
            )
        except TransportError as e:
            raise TransportError(
                f"Error deleting site for domain {domain} (site id: {site_id}): {e}"
            ) from e

        self._logger.debug("Incapsula delete site JSON response", body=response.text)
        delete_response = self._decode(
            response,
            SiteDeleteResponse.from_dict,
            f"delete site JSON response for domain {domain} (site id: {site_id})",
        )

        if not delete_response.res.is_success:
            raise RemoteRejectionError(
                f"Error from Incapsula service when deleting site for domain {domain} "
                f"(site id: {site_id}): {response.text}",
                body=response.text,
                status_code=response.status_code,
            )


def describe_site(status: SiteStatusResponse) -> dict[str, Any]:
    """Flatten the most useful status fields for display."""
    ddos = status.security.get_waf_rule(DDOS_RULE_ID)
    return {
        "site_id": status.site_id,
        "domain": status.domain,
        "status": status.status,
        "active": status.is_active(),
        "account_id": status.account_id,
        "ips": ", ".join(status.ips),
        "dns": "; ".join(
            f"{record.name} {record.record_type} {','.join(record.targets)}" for record in status.dns
        ),
        "waf_rules": len(status.security.waf_rules),
        "acl_rules": len(status.security.acl_rules),
        "ddos_traffic_threshold": ddos.ddos_traffic_threshold if ddos else "",
        "certificate_status": status.ssl.generated_certificate.validation_status,
    }
