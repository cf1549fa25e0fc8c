"""Registry security configuration and verifier configuration models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .release import PackageIdentity, Registry


class TrustAction(str, Enum):
    """Administrator-configured reaction to an unsigned or untrusted release."""

    PROMPT = "prompt"
    ERROR = "error"
    WARN = "warn"
    SILENT_ALLOW = "silentAllow"


class CertificateExpirationCheck(str, Enum):
    """Declarative certificate expiration check."""

    ENABLED = "enabled"
    DISABLED = "disabled"


class CertificateRevocationCheck(str, Enum):
    """Certificate revocation check, shared by configuration and verifier."""

    STRICT = "strict"
    ALLOW_SOFT_FAIL = "allowSoftFail"
    DISABLED = "disabled"


class ValidationChecks(BaseModel):
    """Optional overrides for certificate checks."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    certificate_expiration: Optional[CertificateExpirationCheck] = Field(
        default=None, alias="certificateExpiration"
    )
    certificate_revocation: Optional[CertificateRevocationCheck] = Field(
        default=None, alias="certificateRevocation"
    )


class RegistrySecurityConfig(BaseModel):
    """The `signing` block of a registry's security configuration."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    on_unsigned: Optional[TrustAction] = Field(default=None, alias="onUnsigned")
    on_untrusted_certificate: Optional[TrustAction] = Field(
        default=None, alias="onUntrustedCertificate"
    )
    trusted_root_certificates_path: Optional[str] = Field(
        default=None, alias="trustedRootCertificatesPath"
    )
    include_default_trusted_root_certificates: Optional[bool] = Field(
        default=None, alias="includeDefaultTrustedRootCertificates"
    )
    validation_checks: Optional[ValidationChecks] = Field(
        default=None, alias="validationChecks"
    )


class SecurityEntry(BaseModel):
    """One level of the security configuration (default or an override)."""

    model_config = ConfigDict(frozen=True)

    signing: Optional[RegistrySecurityConfig] = None


class SecurityConfiguration(BaseModel):
    """
    The `security` section of a registries configuration file.

    Signing settings are resolved field by field with the precedence
    package override > scope override > registry override > default.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    default: SecurityEntry = Field(default_factory=SecurityEntry)
    registry_overrides: Dict[str, SecurityEntry] = Field(
        default_factory=dict, alias="registryOverrides"
    )
    scope_overrides: Dict[str, SecurityEntry] = Field(
        default_factory=dict, alias="scopeOverrides"
    )
    package_overrides: Dict[str, SecurityEntry] = Field(
        default_factory=dict, alias="packageOverrides"
    )

    @field_validator("registry_overrides", "scope_overrides", "package_overrides")
    @classmethod
    def normalize_keys(cls, v: Dict[str, SecurityEntry]) -> Dict[str, SecurityEntry]:
        """Override keys are matched case-insensitively."""
        return {key.strip().lower(): entry for key, entry in v.items()}

    def signing_for(
        self, registry: Registry, package: PackageIdentity
    ) -> RegistrySecurityConfig:
        """
        Resolve the effective signing configuration for a package.

        Args:
            registry: Registry the package is fetched from
            package: Package identity

        Returns:
            The merged RegistrySecurityConfig
        """
        entries = (
            self.default,
            self.registry_overrides.get(registry.host),
            self.scope_overrides.get(package.scope),
            self.package_overrides.get(str(package)),
        )
        merged: Dict[str, Any] = {}
        for entry in entries:
            if entry is None or entry.signing is None:
                continue
            for key, value in entry.signing.model_dump(exclude_unset=True).items():
                if key == "validation_checks" and isinstance(value, dict):
                    checks = dict(merged.get(key) or {})
                    checks.update(value)
                    merged[key] = checks
                else:
                    merged[key] = value
        return RegistrySecurityConfig(**merged)


@dataclass(frozen=True)
class CertificateExpirationPolicy:
    """Expiration check; `validation_time` of None means "now"."""

    enabled: bool = True
    validation_time: Optional[datetime] = None

    @classmethod
    def disabled(cls) -> "CertificateExpirationPolicy":
        return cls(enabled=False)


@dataclass(frozen=True)
class VerifierConfiguration:
    """Concrete input for the signature verifier, built fresh per validation."""

    trusted_roots: Tuple[bytes, ...] = ()
    include_default_trust_store: bool = True
    certificate_expiration: CertificateExpirationPolicy = field(
        default_factory=CertificateExpirationPolicy
    )
    certificate_revocation: CertificateRevocationCheck = CertificateRevocationCheck.STRICT
