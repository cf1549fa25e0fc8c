"""Build verifier configuration from a registry's signing configuration."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models.errors import BadConfigurationError
from ..models.security import (
    CertificateExpirationCheck,
    CertificateExpirationPolicy,
    RegistrySecurityConfig,
    VerifierConfiguration,
)
from .filesystem import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)


class VerifierConfigurationBuilder:
    """
    Translates declarative signing settings into a VerifierConfiguration.

    Responsibilities:
    - Load trusted root certificates from the configured directory
    - Copy through explicitly configured trust store and certificate checks
    - Fail closed: any unreadable trust root aborts the whole build

    Nothing is cached; trust roots are re-read on every build.
    """

    def __init__(self, file_system: Optional[FileSystem] = None):
        self.file_system = file_system or LocalFileSystem()

    def build(self, configuration: RegistrySecurityConfig) -> VerifierConfiguration:
        """
        Build a fresh verifier configuration.

        Args:
            configuration: Effective signing configuration of the registry

        Returns:
            VerifierConfiguration for a single validation

        Raises:
            BadConfigurationError: If the trust roots cannot be loaded
        """
        options: Dict[str, Any] = {}

        if configuration.trusted_root_certificates_path is not None:
            options["trusted_roots"] = tuple(
                self._load_trusted_roots(configuration.trusted_root_certificates_path)
            )

        if configuration.include_default_trusted_root_certificates is not None:
            options["include_default_trust_store"] = (
                configuration.include_default_trusted_root_certificates
            )

        checks = configuration.validation_checks
        if checks is not None:
            if checks.certificate_expiration is CertificateExpirationCheck.ENABLED:
                options["certificate_expiration"] = CertificateExpirationPolicy(
                    enabled=True, validation_time=None
                )
            elif checks.certificate_expiration is CertificateExpirationCheck.DISABLED:
                options["certificate_expiration"] = CertificateExpirationPolicy.disabled()

            if checks.certificate_revocation is not None:
                options["certificate_revocation"] = checks.certificate_revocation

        return VerifierConfiguration(**options)

    def _load_trusted_roots(self, directory_path: str) -> List[bytes]:
        """Read every entry of the trust root directory in listing order."""
        directory = Path(directory_path)
        if not directory_path or not directory.is_absolute():
            raise BadConfigurationError(f"{directory_path!r} is invalid: not an absolute path")

        try:
            is_directory = self.file_system.is_directory(directory)
        except (OSError, ValueError) as e:
            raise BadConfigurationError(f"{directory_path} is invalid: {e}") from e
        if not is_directory:
            raise BadConfigurationError(f"{directory_path} is not a directory")

        try:
            entries = self.file_system.list_directory(directory)
        except (OSError, ValueError) as e:
            raise BadConfigurationError(f"failed to list trust roots in {directory_path}: {e}") from e

        trusted_roots: List[bytes] = []
        for entry in entries:
            trust_root_path = directory / entry
            try:
                trusted_roots.append(self.file_system.read_bytes(trust_root_path))
            except (OSError, ValueError) as e:
                raise BadConfigurationError(
                    f"failed to load trust root {trust_root_path}: {e}"
                ) from e

        logger.debug("Loaded %d trusted root(s) from %s", len(trusted_roots), directory_path)
        return trusted_roots
