from __future__ import annotations

import base64
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

import pytest
from hypothesis import settings

from registry_signing.models.release import PackageIdentity, Registry, ReleaseMetadata
from registry_signing.models.security import VerifierConfiguration
from registry_signing.models.signature import SignatureFormat, SigningIdentity, VerificationOutcome
from registry_signing.services.delegates import SignatureValidationDelegate
from registry_signing.services.filesystem import FileSystem
from registry_signing.services.metadata import ReleaseMetadataProvider
from registry_signing.services.signature_verifier import SignatureVerifier
from registry_signing.services.signing_entity_tofu import PriorTrustLedger

_DEFAULT_MAX_EXAMPLES = int(os.getenv("HYPOTHESIS_MAX_EXAMPLES", "25"))

# イベントループを伴うプロパティテストは遅くなりがちなのでデッドラインを無効化する
if "HYPOTHESIS_PROFILE" not in os.environ:
    try:
        settings.register_profile(
            "ci",
            settings(
                deadline=None,
                max_examples=_DEFAULT_MAX_EXAMPLES,
            ),
        )
    except ValueError:
        # プロファイルが既に存在する場合は無視して既定プロファイルを読み込む
        pass
    settings.load_profile("ci")


class StubMetadataProvider(ReleaseMetadataProvider):
    """固定のメタデータ（または例外）を返す取得元。"""

    def __init__(
        self, metadata: Optional[ReleaseMetadata] = None, error: Optional[Exception] = None
    ) -> None:
        self.metadata = metadata
        self.error = error
        self.calls: List[Dict[str, object]] = []

    async def get_metadata(
        self, package: PackageIdentity, version: str, *, timeout: Optional[float] = None
    ) -> ReleaseMetadata:
        self.calls.append({"package": package, "version": version, "timeout": timeout})
        if self.error is not None:
            raise self.error
        assert self.metadata is not None
        return self.metadata


class StubVerifier(SignatureVerifier):
    """固定の検証結果（または例外）を返す検証器。"""

    def __init__(
        self, outcome: Optional[VerificationOutcome] = None, error: Optional[Exception] = None
    ) -> None:
        self.outcome = outcome
        self.error = error
        self.calls: List[Dict[str, object]] = []

    async def verify(
        self,
        *,
        signature: bytes,
        content: bytes,
        signature_format: SignatureFormat,
        configuration: VerifierConfiguration,
        timeout: Optional[float] = None,
    ) -> VerificationOutcome:
        self.calls.append(
            {
                "signature": signature,
                "content": content,
                "signature_format": signature_format,
                "configuration": configuration,
                "timeout": timeout,
            }
        )
        if self.error is not None:
            raise self.error
        assert self.outcome is not None
        return self.outcome


class RecordingLedger(PriorTrustLedger):
    """照合要求を記録する台帳。"""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls: List[Optional[SigningIdentity]] = []

    async def reconcile(
        self,
        *,
        registry: Registry,
        package: PackageIdentity,
        version: str,
        signing_identity: Optional[SigningIdentity],
    ) -> None:
        self.calls.append(signing_identity)
        if self.error is not None:
            raise self.error


class CountingDelegate(SignatureValidationDelegate):
    """固定の回答を返し、呼び出し回数を数えるデリゲート。"""

    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.unsigned_calls = 0
        self.untrusted_calls = 0

    async def on_unsigned(
        self, *, registry: Registry, package: PackageIdentity, version: str
    ) -> bool:
        self.unsigned_calls += 1
        return self.answer

    async def on_untrusted(
        self, *, registry: Registry, package: PackageIdentity, version: str
    ) -> bool:
        self.untrusted_calls += 1
        return self.answer


class MemoryFileSystem(FileSystem):
    """ディレクトリ内容をメモリ上に保持するファイルシステム。"""

    def __init__(
        self,
        directories: Dict[str, Dict[str, bytes]],
        unreadable: Optional[Set[str]] = None,
    ) -> None:
        self.directories = directories
        self.unreadable = unreadable or set()
        self.reads: List[Path] = []

    def is_directory(self, path: Path) -> bool:
        return str(path) in self.directories

    def list_directory(self, path: Path) -> List[str]:
        return list(self.directories[str(path)])

    def read_bytes(self, path: Path) -> bytes:
        self.reads.append(path)
        if path.name in self.unreadable:
            raise PermissionError(13, "Permission denied", str(path))
        return self.directories[str(path.parent)][path.name]


@pytest.fixture
def registry() -> Registry:
    return Registry(url="https://packages.example.com")


@pytest.fixture
def package() -> PackageIdentity:
    return PackageIdentity.parse("mona.LinkedList")


@pytest.fixture
def signer() -> SigningIdentity:
    return SigningIdentity(name="Mona Lisa", organizational_unit="OSS", organization="Example Corp")


@pytest.fixture
def make_metadata() -> Callable[..., ReleaseMetadata]:
    """ソースアーカイブの署名情報を指定してメタデータを組み立てる。"""

    def _make(
        *,
        signature: Optional[bytes] = b"signature-bytes",
        signature_format: Optional[str] = SignatureFormat.CMS_1_0_0.value,
        with_source_archive: bool = True,
        raw_signature: Optional[str] = None,
    ) -> ReleaseMetadata:
        resources: List[Dict[str, object]] = [{"name": "readme", "type": "text/markdown"}]
        if with_source_archive:
            signing: Optional[Dict[str, object]] = None
            encoded = raw_signature
            if encoded is None and signature is not None:
                encoded = base64.b64encode(signature).decode("ascii")
            if encoded is not None or signature_format is not None:
                signing = {"signatureBase64Encoded": encoded, "signatureFormat": signature_format}
            resources.append(
                {
                    "name": "source-archive",
                    "type": "application/zip",
                    "checksum": "a2ac54cf25fbc1ad0028f03f0aa4b96833b83bb05a14e510892bb27dea4dc812",
                    "signing": signing,
                }
            )
        return ReleaseMetadata.model_validate(
            {"id": "mona.LinkedList", "version": "1.1.1", "resources": resources}
        )

    return _make
