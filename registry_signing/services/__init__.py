# Services package

from .delegates import (
    AutoAcceptDelegate,
    AutoRejectDelegate,
    InteractivePromptDelegate,
    SignatureValidationDelegate,
)
from .filesystem import FileSystem, LocalFileSystem
from .metadata import ReleaseMetadataProvider
from .metrics import ValidationMetrics
from .observability import ObservabilityScope
from .security_config import ConfigError, SecurityConfigService
from .signature_decoder import DecodedSignature, SignatureDecoder
from .signature_verifier import SignatureVerifier
from .signing_entity_tofu import NoopPriorTrustLedger, PriorTrustLedger
from .trust_policy import TrustPolicyEngine
from .validation import SignatureValidationService, ValidationResult
from .verifier_config import VerifierConfigurationBuilder

__all__ = [
    "AutoAcceptDelegate",
    "AutoRejectDelegate",
    "ConfigError",
    "DecodedSignature",
    "FileSystem",
    "InteractivePromptDelegate",
    "LocalFileSystem",
    "NoopPriorTrustLedger",
    "ObservabilityScope",
    "PriorTrustLedger",
    "ReleaseMetadataProvider",
    "SecurityConfigService",
    "SignatureDecoder",
    "SignatureValidationDelegate",
    "SignatureValidationService",
    "SignatureVerifier",
    "TrustPolicyEngine",
    "ValidationMetrics",
    "ValidationResult",
    "VerifierConfigurationBuilder",
]
