"""Security configuration loading from the registries configuration file."""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..config import settings
from ..models.release import PackageIdentity, Registry
from ..models.security import RegistrySecurityConfig, SecurityConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Custom exception for configuration-related errors."""

    pass


class SecurityConfigService:
    """
    Reads the `security` section of a registries configuration file.

    Responsibilities:
    - Read and parse the registries configuration file
    - Validate the security section
    - Resolve effective signing settings per registry and package
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the Security Config Service.

        Args:
            config_path: Path to the registries configuration file.
                        Defaults to the `registries_config_path` setting.
        """
        self.config_path = Path(config_path or settings.registries_config_path)
        logger.info(f"Security config service initialized with path: {self.config_path}")

    async def read_security_configuration(self) -> SecurityConfiguration:
        """
        Read the security section from file.

        Returns:
            SecurityConfiguration (empty when the file is missing or empty)

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        try:
            if not self.config_path.exists():
                logger.info(f"Registries file not found at {self.config_path}, using empty security config")
                return SecurityConfiguration()

            if self.config_path.stat().st_size == 0:
                logger.info(f"Registries file is empty at {self.config_path}, using empty security config")
                return SecurityConfiguration()

            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid JSON in registries configuration file: {e}") from e
            except IOError as e:
                raise ConfigError(f"Failed to read registries configuration file: {e}") from e

            if not isinstance(data, dict):
                raise ConfigError("Registries configuration must be a JSON object")

            try:
                return SecurityConfiguration.model_validate(data.get("security") or {})
            except ValidationError as e:
                raise ConfigError(f"Invalid security configuration format: {e}") from e

        except ConfigError:
            raise
        except Exception as e:
            raise ConfigError(f"Unexpected error reading security configuration: {e}") from e

    async def signing_configuration(
        self, registry: Registry, package: PackageIdentity
    ) -> RegistrySecurityConfig:
        """
        Resolve the signing settings that apply to a package.

        The file is read on every call so that edits take effect immediately.
        """
        configuration = await self.read_security_configuration()
        return configuration.signing_for(registry, package)
