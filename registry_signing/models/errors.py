"""署名検証パイプラインの例外とエラーコード。"""

from enum import Enum
from typing import Optional


class SignatureValidationErrorCode(str, Enum):
    """機械可読なエラーコード。"""

    RETRIEVAL_FAILED = "retrieval_failed"
    MISSING_SOURCE_ARCHIVE = "missing_source_archive"
    SOURCE_ARCHIVE_NOT_SIGNED = "source_archive_not_signed"
    SIGNATURE_LOAD_FAILED = "signature_load_failed"
    MISSING_SIGNATURE_FORMAT = "missing_signature_format"
    UNKNOWN_SIGNATURE_FORMAT = "unknown_signature_format"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_SIGNING_CERTIFICATE = "invalid_signing_certificate"
    VERIFIER_FAILED = "verifier_failed"
    SIGNER_NOT_TRUSTED = "signer_not_trusted"
    DELEGATE_FAILED = "delegate_failed"
    MISSING_CONFIGURATION = "missing_configuration"
    BAD_CONFIGURATION = "bad_configuration"


class SignatureValidationError(Exception):
    """署名検証失敗を表す例外の基底クラス。"""

    error_code: SignatureValidationErrorCode

    def __init__(
        self,
        message: str,
        *,
        registry: Optional[str] = None,
        package: Optional[str] = None,
        version: Optional[str] = None,
        remediation: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.registry = registry
        self.package = package
        self.version = version
        self.remediation = remediation


class TrustRejectionError(SignatureValidationError):
    """信頼ポリシーが明示的に拒否したことを表す。

    この例外で終わる検証でも署名者の TOFU 照合は実行される。
    """


class ReleaseMetadataRetrievalError(SignatureValidationError):
    error_code = SignatureValidationErrorCode.RETRIEVAL_FAILED

    def __init__(self, *, registry: str, package: str, version: str, cause: BaseException) -> None:
        super().__init__(
            f"failed retrieving '{package}' version {version} source archive signature "
            f"from '{registry}': {cause}",
            registry=registry,
            package=package,
            version=version,
        )
        self.cause = cause


class MissingSourceArchiveError(SignatureValidationError):
    error_code = SignatureValidationErrorCode.MISSING_SOURCE_ARCHIVE

    def __init__(self, *, registry: str, package: str, version: str) -> None:
        super().__init__(
            f"missing source archive for '{package}' version {version} from '{registry}'",
            registry=registry,
            package=package,
            version=version,
        )


class SourceArchiveNotSignedError(TrustRejectionError):
    error_code = SignatureValidationErrorCode.SOURCE_ARCHIVE_NOT_SIGNED

    def __init__(self, *, registry: str, package: str, version: str) -> None:
        super().__init__(
            f"'{package}' version {version} from '{registry}' is not signed",
            registry=registry,
            package=package,
            version=version,
            remediation="set security.signing.onUnsigned to allow unsigned releases",
        )


class SignatureLoadError(SignatureValidationError):
    error_code = SignatureValidationErrorCode.SIGNATURE_LOAD_FAILED

    def __init__(self, *, registry: str, package: str, version: str, cause: BaseException) -> None:
        super().__init__(
            f"failed loading signature of '{package}' version {version} for validation: {cause}",
            registry=registry,
            package=package,
            version=version,
        )
        self.cause = cause


class MissingSignatureFormatError(SignatureValidationError):
    error_code = SignatureValidationErrorCode.MISSING_SIGNATURE_FORMAT

    def __init__(self, *, registry: str, package: str, version: str) -> None:
        super().__init__(
            f"missing signature format for '{package}' version {version}",
            registry=registry,
            package=package,
            version=version,
        )


class UnknownSignatureFormatError(SignatureValidationError):
    error_code = SignatureValidationErrorCode.UNKNOWN_SIGNATURE_FORMAT

    def __init__(self, signature_format: str, *, registry: str, package: str, version: str) -> None:
        super().__init__(
            f"unknown signature format '{signature_format}' for '{package}' version {version}",
            registry=registry,
            package=package,
            version=version,
        )
        self.signature_format = signature_format


class InvalidSignatureError(SignatureValidationError):
    error_code = SignatureValidationErrorCode.INVALID_SIGNATURE

    def __init__(self, reason: str, *, registry: str, package: str, version: str) -> None:
        super().__init__(
            f"signature of '{package}' version {version} is invalid: {reason}",
            registry=registry,
            package=package,
            version=version,
        )
        self.reason = reason


class InvalidSigningCertificateError(SignatureValidationError):
    error_code = SignatureValidationErrorCode.INVALID_SIGNING_CERTIFICATE

    def __init__(self, reason: str, *, registry: str, package: str, version: str) -> None:
        super().__init__(
            f"the signing certificate of '{package}' version {version} is invalid: {reason}",
            registry=registry,
            package=package,
            version=version,
        )
        self.reason = reason


class SignatureVerifierFailedError(SignatureValidationError):
    error_code = SignatureValidationErrorCode.VERIFIER_FAILED

    def __init__(self, *, registry: str, package: str, version: str, cause: BaseException) -> None:
        super().__init__(
            f"failed to validate signature of '{package}' version {version}: {cause}",
            registry=registry,
            package=package,
            version=version,
        )
        self.cause = cause


class SignerNotTrustedError(TrustRejectionError):
    error_code = SignatureValidationErrorCode.SIGNER_NOT_TRUSTED

    def __init__(self, signing_identity: object, *, registry: str, package: str, version: str) -> None:
        super().__init__(
            f"the signer '{signing_identity}' of '{package}' version {version} is not trusted",
            registry=registry,
            package=package,
            version=version,
            remediation="add the signer's root certificate to security.signing.trustedRootCertificatesPath",
        )
        self.signing_identity = signing_identity


class DelegateFailedError(SignatureValidationError):
    error_code = SignatureValidationErrorCode.DELEGATE_FAILED

    def __init__(self, category: str, *, registry: str, package: str, version: str, cause: BaseException) -> None:
        super().__init__(
            f"failed asking whether to continue with {category} release '{package}' "
            f"version {version} from '{registry}': {cause}",
            registry=registry,
            package=package,
            version=version,
        )
        self.category = category
        self.cause = cause


class MissingConfigurationError(SignatureValidationError):
    error_code = SignatureValidationErrorCode.MISSING_CONFIGURATION

    def __init__(self, details: str, **context: Optional[str]) -> None:
        super().__init__(f"missing configuration: {details}", **context)
        self.details = details


class BadConfigurationError(SignatureValidationError):
    error_code = SignatureValidationErrorCode.BAD_CONFIGURATION

    def __init__(self, details: str, **context: Optional[str]) -> None:
        super().__init__(f"bad configuration: {details}", **context)
        self.details = details
