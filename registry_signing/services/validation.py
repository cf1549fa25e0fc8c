"""署名検証パイプライン: メタデータ取得から TOFU 照合までを順に実行する。"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, assert_never

from ..models.errors import (
    BadConfigurationError,
    InvalidSignatureError,
    InvalidSigningCertificateError,
    ReleaseMetadataRetrievalError,
    SignatureVerifierFailedError,
    SourceArchiveNotSignedError,
    TrustRejectionError,
)
from ..models.release import PackageIdentity, Registry, ReleaseMetadata
from ..models.security import RegistrySecurityConfig, VerifierConfiguration
from ..models.signature import (
    CertificateInvalid,
    CertificateUntrusted,
    SignatureInvalid,
    SignatureValid,
    SigningIdentity,
    VerificationOutcome,
)
from .delegates import SignatureValidationDelegate
from .filesystem import FileSystem
from .metadata import ReleaseMetadataProvider
from .metrics import ValidationMetrics
from .observability import ObservabilityScope
from .signature_decoder import DecodedSignature, SignatureDecoder
from .signature_verifier import SignatureVerifier
from .signing_entity_tofu import NoopPriorTrustLedger, PriorTrustLedger
from .trust_policy import TrustPolicyEngine
from .verifier_config import VerifierConfigurationBuilder

logger = logging.getLogger(__name__)

_OUTCOME_TYPES = (SignatureValid, SignatureInvalid, CertificateInvalid, CertificateUntrusted)


@dataclass(frozen=True)
class ValidationResult:
    """コールバック経由で通知する検証結果。"""

    signing_identity: Optional[SigningIdentity] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SignatureValidationService:
    """
    リリースの署名を検証し、信頼ポリシーと TOFU 台帳を適用する。

    処理順は常に メタデータ取得 → デコード → 検証器設定の構築 → 検証
    → ポリシー適用 → 台帳照合 → 完了 であり、呼び出しごとに独立している。
    `timeout` は取得・検証の各コラボレータへ渡すヒントで、ここでは強制しない。
    """

    def __init__(
        self,
        *,
        metadata_provider: ReleaseMetadataProvider,
        verifier: SignatureVerifier,
        ledger: Optional[PriorTrustLedger] = None,
        delegate: Optional[SignatureValidationDelegate] = None,
        file_system: Optional[FileSystem] = None,
        metrics: Optional[ValidationMetrics] = None,
    ) -> None:
        self.metadata_provider = metadata_provider
        self.verifier = verifier
        self.ledger = ledger or NoopPriorTrustLedger()
        self.metrics = metrics
        self.decoder = SignatureDecoder()
        self.config_builder = VerifierConfigurationBuilder(file_system)
        self.trust_policy = TrustPolicyEngine(delegate=delegate, metrics=metrics)

    async def validate(
        self,
        *,
        registry: Registry,
        package: PackageIdentity,
        version: str,
        content: bytes,
        configuration: RegistrySecurityConfig,
        timeout: Optional[float] = None,
        observability_scope: Optional[ObservabilityScope] = None,
    ) -> Optional[SigningIdentity]:
        """
        リリースを検証し、信頼できる署名者（無ければ None）を返す。

        信頼判定に到達した場合は、拒否であっても台帳照合を 1 回だけ行ってから
        結果を返す。判定前の失敗（取得失敗・不正な署名など）では照合しない。

        Raises:
            SignatureValidationError: 検証に失敗した、またはポリシーが拒否した場合
        """
        scope = observability_scope or ObservabilityScope()
        started = time.monotonic()

        try:
            signing_identity = await self._get_and_validate_signature(
                registry=registry,
                package=package,
                version=version,
                content=content,
                configuration=configuration,
                timeout=timeout,
                scope=scope,
            )
        except TrustRejectionError:
            await self._reconcile(registry, package, version, None)
            self._record("rejected", registry, started)
            raise
        except Exception:
            self._record("failed", registry, started)
            raise

        await self._reconcile(registry, package, version, signing_identity)
        self._record("accepted", registry, started)
        return signing_identity

    def validate_with_completion(
        self,
        *,
        completion: Callable[[ValidationResult], Any],
        callback_loop: Optional[asyncio.AbstractEventLoop] = None,
        **kwargs: Any,
    ) -> "asyncio.Task[None]":
        """
        検証をタスクとして開始し、完了時に `completion` を 1 回だけ呼ぶ。

        実行中のイベントループから呼び出すこと。`callback_loop` を指定した場合は
        そのループ上でコールバックを実行する。
        """
        running_loop = asyncio.get_running_loop()
        target_loop = callback_loop or running_loop

        async def _run() -> None:
            try:
                signing_identity = await self.validate(**kwargs)
            except Exception as exc:  # noqa: BLE001
                result = ValidationResult(error=exc)
            else:
                result = ValidationResult(signing_identity=signing_identity)
            target_loop.call_soon_threadsafe(completion, result)

        return running_loop.create_task(_run())

    async def _get_and_validate_signature(
        self,
        *,
        registry: Registry,
        package: PackageIdentity,
        version: str,
        content: bytes,
        configuration: RegistrySecurityConfig,
        timeout: Optional[float],
        scope: ObservabilityScope,
    ) -> Optional[SigningIdentity]:
        metadata = await self._fetch_metadata(registry, package, version, timeout)

        try:
            decoded = self.decoder.decode(
                metadata, registry=registry, package=package, version=version
            )
        except SourceArchiveNotSignedError:
            scope.emit_info(f"{package} {version} from {registry} is unsigned")
            return await self.trust_policy.resolve_unsigned(
                registry=registry,
                package=package,
                version=version,
                configuration=configuration,
                scope=scope,
            )

        # 信頼済みルートの読み込みはブロッキング I/O のため executor で行う
        # build() は副作用を持たず、スレッド間で共有する状態を持たないこと
        loop = asyncio.get_running_loop()
        try:
            verifier_configuration = await loop.run_in_executor(
                None, self.config_builder.build, configuration
            )
        except BadConfigurationError as exc:
            raise BadConfigurationError(
                exc.details, registry=str(registry), package=str(package), version=version
            ) from exc

        outcome = await self._verify(
            registry, package, version, decoded, content, verifier_configuration, timeout
        )
        return await self._apply_outcome(
            outcome,
            registry=registry,
            package=package,
            version=version,
            configuration=configuration,
            scope=scope,
        )

    async def _fetch_metadata(
        self,
        registry: Registry,
        package: PackageIdentity,
        version: str,
        timeout: Optional[float],
    ) -> ReleaseMetadata:
        try:
            return await self.metadata_provider.get_metadata(package, version, timeout=timeout)
        except Exception as exc:  # noqa: BLE001
            raise ReleaseMetadataRetrievalError(
                registry=str(registry), package=str(package), version=version, cause=exc
            ) from exc

    async def _verify(
        self,
        registry: Registry,
        package: PackageIdentity,
        version: str,
        decoded: DecodedSignature,
        content: bytes,
        verifier_configuration: VerifierConfiguration,
        timeout: Optional[float],
    ) -> VerificationOutcome:
        try:
            outcome = await self.verifier.verify(
                signature=decoded.signature,
                content=content,
                signature_format=decoded.signature_format,
                configuration=verifier_configuration,
                timeout=timeout,
            )
            if not isinstance(outcome, _OUTCOME_TYPES):
                raise TypeError(
                    f"verifier returned {type(outcome).__name__}, not a verification outcome"
                )
            return outcome
        except Exception as exc:  # noqa: BLE001
            raise SignatureVerifierFailedError(
                registry=str(registry), package=str(package), version=version, cause=exc
            ) from exc

    async def _apply_outcome(
        self,
        outcome: VerificationOutcome,
        *,
        registry: Registry,
        package: PackageIdentity,
        version: str,
        configuration: RegistrySecurityConfig,
        scope: ObservabilityScope,
    ) -> Optional[SigningIdentity]:
        context = {"registry": str(registry), "package": str(package), "version": version}

        if isinstance(outcome, SignatureValid):
            scope.emit_info(
                f"{package} {version} from {registry} is signed with a valid entity "
                f"'{outcome.signing_identity}'"
            )
            return outcome.signing_identity
        elif isinstance(outcome, SignatureInvalid):
            raise InvalidSignatureError(outcome.reason, **context)
        elif isinstance(outcome, CertificateInvalid):
            raise InvalidSigningCertificateError(outcome.reason, **context)
        elif isinstance(outcome, CertificateUntrusted):
            scope.emit_info(
                f"{package} {version} from {registry} signing entity "
                f"'{outcome.signing_identity}' is untrusted"
            )
            return await self.trust_policy.resolve_untrusted(
                registry=registry,
                package=package,
                version=version,
                signing_identity=outcome.signing_identity,
                configuration=configuration,
                scope=scope,
            )
        else:
            assert_never(outcome)

    async def _reconcile(
        self,
        registry: Registry,
        package: PackageIdentity,
        version: str,
        signing_identity: Optional[SigningIdentity],
    ) -> None:
        """台帳照合を待つ。台帳側の判定はこの呼び出しの結果を変えない。"""
        try:
            await self.ledger.reconcile(
                registry=registry,
                package=package,
                version=version,
                signing_identity=signing_identity,
            )
        except Exception:  # noqa: BLE001
            logger.warning(
                "Signing entity check for %s %s from %s reported a problem",
                package,
                version,
                registry,
                exc_info=True,
            )

    def _record(self, outcome: str, registry: Registry, started: float) -> None:
        if self.metrics is not None:
            self.metrics.record_outcome(
                outcome, registry=registry.host, seconds=time.monotonic() - started
            )
