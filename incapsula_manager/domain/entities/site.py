"""Site entities decoded from the Incapsula provisioning API."""
from dataclasses import dataclass, field
from typing import Any

from incapsula_manager.domain.value_objects.result_code import ResultCode


def _records(data: dict, key: str, record_type: type) -> list:
    """Decode a list of nested objects, tolerating null or absent keys."""
    return [record_type.from_dict(item) for item in (data.get(key) or [])]


def _strings(data: dict, key: str) -> list[str]:
    return [str(item) for item in (data.get(key) or [])]


def _flag(data: dict, key: str) -> bool:
    """Decode a boolean field. Absent or null means False.

    Only JSON booleans and the strings "true"/"false" are accepted; anything
    else raises ValueError so a changed payload is reported, not guessed at.
    """
    value = data.get(key)
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"{key}: expected a boolean, got {value!r}")


@dataclass
class SiteAddResponse:
    """Result of adding a site."""

    site_id: int
    res: ResultCode

    @classmethod
    def from_dict(cls, data: dict) -> "SiteAddResponse":
        return cls(site_id=int(data.get("site_id") or 0), res=ResultCode.parse(data.get("res")))


@dataclass
class SiteUpdateResponse:
    """Result of configuring a single site parameter."""

    site_id: int
    res: ResultCode

    @classmethod
    def from_dict(cls, data: dict) -> "SiteUpdateResponse":
        return cls(site_id=int(data.get("site_id") or 0), res=ResultCode.parse(data.get("res")))


@dataclass
class SiteDeleteResponse:
    """Result of deleting a site."""

    res: ResultCode
    res_message: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "SiteDeleteResponse":
        return cls(res=ResultCode.parse(data.get("res")), res_message=data.get("res_message") or "")


@dataclass
class DNSRecord:
    """A DNS instruction: point `name` at `targets` using record `record_type`."""

    name: str
    record_type: str
    targets: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "DNSRecord":
        return cls(
            name=data.get("dns_record_name") or "",
            record_type=data.get("set_type_to") or "",
            targets=_strings(data, "set_data_to"),
        )


@dataclass
class UrlPattern:
    value: str
    pattern: str

    @classmethod
    def from_dict(cls, data: dict) -> "UrlPattern":
        return cls(value=data.get("value") or "", pattern=data.get("pattern") or "")


@dataclass
class GeoFilter:
    countries: list[str] = field(default_factory=list)
    continents: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "GeoFilter":
        data = data or {}
        return cls(countries=_strings(data, "countries"), continents=_strings(data, "continents"))


@dataclass
class ExceptionValue:
    """One matching criterion of a rule exception."""

    id: str = ""
    name: str = ""
    ips: list[str] = field(default_factory=list)
    urls: list[UrlPattern] = field(default_factory=list)
    geo: GeoFilter = field(default_factory=GeoFilter)
    client_apps: list[str] = field(default_factory=list)
    client_app_types: list[str] = field(default_factory=list)
    parameters: list[str] = field(default_factory=list)
    user_agents: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ExceptionValue":
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            ips=_strings(data, "ips"),
            urls=_records(data, "urls", UrlPattern),
            geo=GeoFilter.from_dict(data.get("geo")),
            client_apps=_strings(data, "client_apps"),
            client_app_types=_strings(data, "client_app_types"),
            parameters=_strings(data, "parameters"),
            user_agents=_strings(data, "user_agents"),
        )


@dataclass
class RuleException:
    """An exception attached to a WAF or ACL rule."""

    id: int = 0
    values: list[ExceptionValue] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "RuleException":
        return cls(id=int(data.get("id") or 0), values=_records(data, "values", ExceptionValue))


@dataclass
class WafRule:
    """A WAF rule and its configured action."""

    id: str
    name: str
    action: str = ""
    action_text: str = ""
    block_bad_bots: bool = False
    challenge_suspected_bots: bool = False
    activation_mode: str = ""
    activation_mode_text: str = ""
    ddos_traffic_threshold: int = 0
    unknown_clients_challenge: str = ""
    block_non_essential_bots: bool = False
    exceptions: list[RuleException] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "WafRule":
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            action=data.get("action") or "",
            action_text=data.get("action_text") or "",
            block_bad_bots=_flag(data, "block_bad_bots"),
            challenge_suspected_bots=_flag(data, "challenge_suspected_bots"),
            activation_mode=data.get("activation_mode") or "",
            activation_mode_text=data.get("activation_mode_text") or "",
            ddos_traffic_threshold=int(data.get("ddos_traffic_threshold") or 0),
            unknown_clients_challenge=data.get("unknown_clients_challenge") or "",
            block_non_essential_bots=_flag(data, "block_non_essential_bots"),
            exceptions=_records(data, "exceptions", RuleException),
        )


@dataclass
class AclRule:
    """A blacklist/whitelist ACL rule."""

    id: str
    name: str
    ips: list[str] = field(default_factory=list)
    geo: GeoFilter = field(default_factory=GeoFilter)
    urls: list[UrlPattern] = field(default_factory=list)
    exceptions: list[RuleException] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "AclRule":
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            ips=_strings(data, "ips"),
            geo=GeoFilter.from_dict(data.get("geo")),
            urls=_records(data, "urls", UrlPattern),
            exceptions=_records(data, "exceptions", RuleException),
        )


@dataclass
class SecuritySettings:
    waf_rules: list[WafRule] = field(default_factory=list)
    acl_rules: list[AclRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "SecuritySettings":
        data = data or {}
        return cls(
            waf_rules=_records(data.get("waf") or {}, "rules", WafRule),
            acl_rules=_records(data.get("acls") or {}, "rules", AclRule),
        )

    def get_waf_rule(self, rule_id: str) -> WafRule | None:
        """Find a WAF rule by its id."""
        return next((rule for rule in self.waf_rules if rule.id == rule_id), None)


@dataclass
class SealLocation:
    id: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "SealLocation":
        data = data or {}
        return cls(id=str(data.get("id") or ""), name=data.get("name") or "")


@dataclass
class GeneratedCertificate:
    """Certificate generated by Incapsula for the site."""

    ca: str = ""
    validation_method: str = ""
    validation_data: Any = None
    san: list[str] = field(default_factory=list)
    validation_status: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "GeneratedCertificate":
        data = data or {}
        return cls(
            ca=data.get("ca") or "",
            validation_method=data.get("validation_method") or "",
            validation_data=data.get("validation_data"),
            san=_strings(data, "san"),
            validation_status=data.get("validation_status") or "",
        )


@dataclass
class SslSettings:
    origin_server_detected: bool = False
    origin_detection_status: str = ""
    custom_certificate_active: bool = False
    generated_certificate: GeneratedCertificate = field(default_factory=GeneratedCertificate)

    @classmethod
    def from_dict(cls, data: dict | None) -> "SslSettings":
        data = data or {}
        origin = data.get("origin_server") or {}
        return cls(
            origin_server_detected=_flag(origin, "detected"),
            origin_detection_status=origin.get("detectionStatus") or "",
            custom_certificate_active=_flag(data.get("custom_certificate") or {}, "active"),
            generated_certificate=GeneratedCertificate.from_dict(data.get("generated_certificate")),
        )


@dataclass
class LoginProtect:
    enabled: bool = False
    specific_users_list: list = field(default_factory=list)
    send_lp_notifications: bool = False
    allow_all_users: bool = False
    authentication_methods: list[str] = field(default_factory=list)
    urls: list = field(default_factory=list)
    url_patterns: list = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "LoginProtect":
        data = data or {}
        return cls(
            enabled=_flag(data, "enabled"),
            specific_users_list=list(data.get("specific_users_list") or []),
            send_lp_notifications=_flag(data, "send_lp_notifications"),
            allow_all_users=_flag(data, "allow_all_users"),
            authentication_methods=_strings(data, "authentication_methods"),
            urls=list(data.get("urls") or []),
            url_patterns=list(data.get("url_patterns") or []),
        )


@dataclass
class DualFactorSettings:
    enabled: bool = False
    allow_all_users: bool = False
    specific_users: list = field(default_factory=list)
    custom_areas: list = field(default_factory=list)
    custom_areas_exceptions: list = field(default_factory=list)
    allowed_media: list[str] = field(default_factory=list)
    should_suggest_applications: bool = False
    should_send_login_notifications: bool = False
    version: int = 0

    @classmethod
    def from_dict(cls, data: dict | None) -> "DualFactorSettings":
        data = data or {}
        return cls(
            enabled=_flag(data, "enabled"),
            allow_all_users=_flag(data, "allowAllUsers"),
            specific_users=list(data.get("specificUsers") or []),
            custom_areas=list(data.get("customAreas") or []),
            custom_areas_exceptions=list(data.get("customAreasExceptions") or []),
            allowed_media=_strings(data, "allowedMedia"),
            # The service spells this key "Applicatons".
            should_suggest_applications=_flag(data, "shouldSuggestApplicatons"),
            should_send_login_notifications=_flag(data, "shouldSendLoginNotifications"),
            version=int(data.get("version") or 0),
        )


@dataclass
class PerformanceConfiguration:
    """Caching and content optimisation settings."""

    acceleration_level: str = ""
    never_cache_resources: list = field(default_factory=list)
    always_cache_resources: list = field(default_factory=list)
    async_validation: bool = False
    minify_javascript: bool = False
    minify_css: bool = False
    minify_static_html: bool = False
    compress_jpeg: bool = False
    progressive_image_rendering: bool = False
    aggressive_compression: bool = False
    compress_png: bool = False
    on_the_fly_compression: bool = False
    tcp_pre_pooling: bool = False
    comply_no_cache: bool = False
    comply_vary: bool = False
    use_shortest_caching: bool = False
    prefer_last_modified: bool = False
    disable_client_side_caching: bool = False
    cache_300x: bool = False
    cache_headers: list = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "PerformanceConfiguration":
        data = data or {}
        caching = data.get("advanced_caching_rules") or {}
        return cls(
            acceleration_level=data.get("acceleration_level") or "",
            never_cache_resources=list(caching.get("never_cache_resources") or []),
            always_cache_resources=list(caching.get("always_cache_resources") or []),
            async_validation=_flag(data, "async_validation"),
            minify_javascript=_flag(data, "minify_javascript"),
            minify_css=_flag(data, "minify_css"),
            minify_static_html=_flag(data, "minify_static_html"),
            # Older payloads carry the misspelt keys.
            compress_jpeg=_flag(data, "compress_jpeg") or _flag(data, "compress_jepg"),
            progressive_image_rendering=_flag(data, "progressive_image_rendering"),
            aggressive_compression=_flag(data, "aggressive_compression"),
            compress_png=_flag(data, "compress_png"),
            on_the_fly_compression=_flag(data, "on_the_fly_compression"),
            tcp_pre_pooling=_flag(data, "tcp_pre_pooling"),
            comply_no_cache=_flag(data, "comply_no_cache"),
            comply_vary=_flag(data, "comply_vary"),
            use_shortest_caching=_flag(data, "use_shortest_caching"),
            prefer_last_modified=_flag(data, "prefer_last_modified") or _flag(data, "perfer_last_modified"),
            disable_client_side_caching=_flag(data, "disable_client_side_caching"),
            cache_300x=_flag(data, "cache300x"),
            cache_headers=list(data.get("cache_headers") or []),
        )


@dataclass
class SiteStatusResponse:
    """
    Full status of a managed site.

    Decoded from the `sites/status` endpoint. Every nested object becomes
    its own record type so the same shape is never defined twice (DNS
    instructions, for example, are used by both `dns` and `original_dns`).
    """

    site_id: int
    res: ResultCode
    status: str = ""
    domain: str = ""
    ref_id: str = ""
    account_id: int = 0
    acceleration_level: str = ""
    acceleration_level_raw: str = ""
    site_creation_date: int = 0
    ips: list[str] = field(default_factory=list)
    dns: list[DNSRecord] = field(default_factory=list)
    original_dns: list[DNSRecord] = field(default_factory=list)
    warnings: list = field(default_factory=list)
    active: str = ""
    restricted_cname_reuse: bool = False
    support_all_tls_versions: bool = False
    use_wildcard_san_instead_of_full_domain_san: bool = False
    add_naked_domain_san: bool = False
    additional_errors: list = field(default_factory=list)
    display_name: str = ""
    security: SecuritySettings = field(default_factory=SecuritySettings)
    seal_location: SealLocation = field(default_factory=SealLocation)
    ssl: SslSettings = field(default_factory=SslSettings)
    dual_factor_settings: DualFactorSettings = field(default_factory=DualFactorSettings)
    login_protect: LoginProtect = field(default_factory=LoginProtect)
    performance_configuration: PerformanceConfiguration = field(
        default_factory=PerformanceConfiguration
    )
    extended_ddos: int = 0
    exception_id: str = ""
    log_level: str = ""
    res_message: str = ""
    debug_id_info: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "SiteStatusResponse":
        return cls(
            site_id=int(data.get("site_id") or 0),
            res=ResultCode.parse(data.get("res")),
            status=data.get("status") or "",
            domain=data.get("domain") or "",
            ref_id=data.get("ref_id") or "",
            account_id=int(data.get("account_id") or 0),
            acceleration_level=data.get("acceleration_level") or "",
            acceleration_level_raw=data.get("acceleration_level_raw") or "",
            site_creation_date=int(data.get("site_creation_date") or 0),
            ips=_strings(data, "ips"),
            dns=_records(data, "dns", DNSRecord),
            original_dns=_records(data, "original_dns", DNSRecord),
            warnings=list(data.get("warnings") or []),
            active=data.get("active") or "",
            restricted_cname_reuse=_flag(data, "restricted_cname_reuse"),
            support_all_tls_versions=_flag(data, "support_all_tls_versions"),
            use_wildcard_san_instead_of_full_domain_san=_flag(
                data, "use_wildcard_san_instead_of_full_domain_san"
            ),
            add_naked_domain_san=_flag(data, "add_naked_domain_san"),
            additional_errors=list(data.get("additionalErrors") or []),
            display_name=data.get("display_name") or "",
            security=SecuritySettings.from_dict(data.get("security")),
            seal_location=SealLocation.from_dict(data.get("sealLocation")),
            ssl=SslSettings.from_dict(data.get("ssl")),
            dual_factor_settings=DualFactorSettings.from_dict(data.get("siteDualFactorSettings")),
            login_protect=LoginProtect.from_dict(data.get("login_protect")),
            performance_configuration=PerformanceConfiguration.from_dict(
                data.get("performance_configuration")
            ),
            extended_ddos=int(data.get("extended_ddos") or 0),
            exception_id=str(data.get("exception_id") or ""),
            log_level=data.get("log_level") or "",
            res_message=data.get("res_message") or "",
            debug_id_info=str((data.get("debug_info") or {}).get("id-info") or ""),
        )

    def is_active(self) -> bool:
        """Check if the site is serving traffic through Incapsula."""
        return self.active == "active"

    def __str__(self) -> str:
        return f"Site({self.site_id}, {self.domain}, {self.status or 'unknown'})"
