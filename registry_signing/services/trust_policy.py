"""未署名・未信頼の検証結果に管理者設定のポリシーを適用する。"""

import logging
from typing import Awaitable, Callable, Optional, assert_never

from ..models.errors import (
    BadConfigurationError,
    DelegateFailedError,
    MissingConfigurationError,
    SignerNotTrustedError,
    SourceArchiveNotSignedError,
    TrustRejectionError,
)
from ..models.release import PackageIdentity, Registry
from ..models.security import RegistrySecurityConfig, TrustAction
from ..models.signature import SigningIdentity
from .delegates import SignatureValidationDelegate
from .metrics import ValidationMetrics
from .observability import ObservabilityScope

logger = logging.getLogger(__name__)


class TrustPolicyEngine:
    """
    onUnsigned / onUntrustedCertificate の判定表を実装する。

    受け入れた場合は常に署名者なし (None) を返す。未信頼の署名者は
    「信頼済み」として後段へ渡さない。拒否は TrustRejectionError で表す。
    """

    def __init__(
        self,
        delegate: Optional[SignatureValidationDelegate] = None,
        metrics: Optional[ValidationMetrics] = None,
    ) -> None:
        self.delegate = delegate
        self.metrics = metrics

    async def resolve_unsigned(
        self,
        *,
        registry: Registry,
        package: PackageIdentity,
        version: str,
        configuration: RegistrySecurityConfig,
        scope: ObservabilityScope,
    ) -> Optional[SigningIdentity]:
        """未署名リリースに onUnsigned を適用する。"""
        context = {"registry": str(registry), "package": str(package), "version": version}
        if configuration.on_unsigned is None:
            raise MissingConfigurationError("security.signing.onUnsigned", **context)

        delegate = self.delegate
        return await self._apply(
            action=configuration.on_unsigned,
            category="unsigned",
            rejection=SourceArchiveNotSignedError(**context),
            ask=(
                (lambda: delegate.on_unsigned(registry=registry, package=package, version=version))
                if delegate is not None
                else None
            ),
            scope=scope,
        )

    async def resolve_untrusted(
        self,
        *,
        registry: Registry,
        package: PackageIdentity,
        version: str,
        signing_identity: SigningIdentity,
        configuration: RegistrySecurityConfig,
        scope: ObservabilityScope,
    ) -> Optional[SigningIdentity]:
        """未信頼の証明書で署名されたリリースに onUntrustedCertificate を適用する。"""
        context = {"registry": str(registry), "package": str(package), "version": version}
        if configuration.on_untrusted_certificate is None:
            raise MissingConfigurationError("security.signing.onUntrustedCertificate", **context)

        delegate = self.delegate
        return await self._apply(
            action=configuration.on_untrusted_certificate,
            category="untrusted",
            rejection=SignerNotTrustedError(signing_identity, **context),
            ask=(
                (lambda: delegate.on_untrusted(registry=registry, package=package, version=version))
                if delegate is not None
                else None
            ),
            scope=scope,
        )

    async def _apply(
        self,
        *,
        action: TrustAction,
        category: str,
        rejection: TrustRejectionError,
        ask: Optional[Callable[[], Awaitable[bool]]],
        scope: ObservabilityScope,
    ) -> Optional[SigningIdentity]:
        if action is TrustAction.PROMPT:
            if ask is None:
                raise BadConfigurationError(
                    f"'prompt' is configured for {category} releases but no delegate is available",
                    registry=rejection.registry,
                    package=rejection.package,
                    version=rejection.version,
                )
            try:
                should_continue = await ask()
            except Exception as exc:  # noqa: BLE001
                raise DelegateFailedError(
                    category,
                    registry=rejection.registry,
                    package=rejection.package,
                    version=rejection.version,
                    cause=exc,
                ) from exc
            logger.debug("Delegate answered %s for %s release", should_continue, category)
            if self.metrics is not None:
                self.metrics.record_prompt(category, accepted=should_continue)
            if not should_continue:
                raise rejection
            return None
        elif action is TrustAction.ERROR:
            raise rejection
        elif action is TrustAction.WARN:
            scope.emit_warning(rejection.message)
            return None
        elif action is TrustAction.SILENT_ALLOW:
            return None
        else:
            assert_never(action)
