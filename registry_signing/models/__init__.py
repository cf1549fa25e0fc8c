# Data models package

from .errors import (
    BadConfigurationError,
    DelegateFailedError,
    InvalidSignatureError,
    InvalidSigningCertificateError,
    MissingConfigurationError,
    MissingSignatureFormatError,
    MissingSourceArchiveError,
    ReleaseMetadataRetrievalError,
    SignatureLoadError,
    SignatureValidationError,
    SignatureValidationErrorCode,
    SignatureVerifierFailedError,
    SignerNotTrustedError,
    SourceArchiveNotSignedError,
    TrustRejectionError,
    UnknownSignatureFormatError,
)
from .release import PackageIdentity, Registry, ReleaseMetadata, ReleaseResource, ResourceSigning
from .security import (
    CertificateExpirationCheck,
    CertificateExpirationPolicy,
    CertificateRevocationCheck,
    RegistrySecurityConfig,
    SecurityConfiguration,
    TrustAction,
    ValidationChecks,
    VerifierConfiguration,
)
from .signature import (
    CertificateInvalid,
    CertificateUntrusted,
    SignatureFormat,
    SignatureInvalid,
    SignatureValid,
    SigningIdentity,
    VerificationOutcome,
)

__all__ = [
    "BadConfigurationError",
    "DelegateFailedError",
    "CertificateExpirationCheck",
    "CertificateExpirationPolicy",
    "CertificateInvalid",
    "CertificateRevocationCheck",
    "CertificateUntrusted",
    "InvalidSignatureError",
    "InvalidSigningCertificateError",
    "MissingConfigurationError",
    "MissingSignatureFormatError",
    "MissingSourceArchiveError",
    "PackageIdentity",
    "Registry",
    "RegistrySecurityConfig",
    "ReleaseMetadata",
    "ReleaseMetadataRetrievalError",
    "ReleaseResource",
    "ResourceSigning",
    "SecurityConfiguration",
    "SignatureFormat",
    "SignatureInvalid",
    "SignatureLoadError",
    "SignatureValid",
    "SignatureValidationError",
    "SignatureValidationErrorCode",
    "SignatureVerifierFailedError",
    "SignerNotTrustedError",
    "SigningIdentity",
    "SourceArchiveNotSignedError",
    "TrustAction",
    "TrustRejectionError",
    "UnknownSignatureFormatError",
    "ValidationChecks",
    "VerificationOutcome",
    "VerifierConfiguration",
]
