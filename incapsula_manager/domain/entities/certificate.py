"""Certificate entities used when checking SAN validation state."""
from dataclasses import dataclass, field

PENDING_USER_ACTION = "PENDING_USER_ACTION"


@dataclass
class SanEntry:
    """A Subject Alternative Name on a site certificate."""

    status: str

    @classmethod
    def from_dict(cls, data: dict) -> "SanEntry":
        return cls(status=data.get("status") or "")

    def is_pending(self) -> bool:
        """Check if the SAN is still waiting on domain validation."""
        return self.status == PENDING_USER_ACTION


@dataclass
class CertificateData:
    sans: list[SanEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "CertificateData":
        return cls(sans=[SanEntry.from_dict(san) for san in (data.get("sans") or [])])


@dataclass
class CertificateCheckResponse:
    """Response of the certificates-ui certificate listing for a site."""

    data: list[CertificateData] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "CertificateCheckResponse":
        return cls(data=[CertificateData.from_dict(item) for item in (data.get("data") or [])])

    def has_validated_san(self) -> bool:
        """
        Check if any SAN has left the PENDING_USER_ACTION state.

        When this is true an existing certificate already covers the site.
        """
        return any(not san.is_pending() for item in self.data for san in item.sans)
