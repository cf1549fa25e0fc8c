"""リリースメタデータから署名を取り出すデコーダ。"""

import base64
import binascii
from dataclasses import dataclass

from ..models.errors import (
    MissingSignatureFormatError,
    MissingSourceArchiveError,
    SignatureLoadError,
    SourceArchiveNotSignedError,
    UnknownSignatureFormatError,
)
from ..models.release import PackageIdentity, Registry, ReleaseMetadata
from ..models.signature import SignatureFormat


@dataclass(frozen=True)
class DecodedSignature:
    """デコード済みの署名。"""

    signature: bytes
    signature_format: SignatureFormat


class SignatureDecoder:
    """ソースアーカイブの署名情報を検証器へ渡せる形に変換する。

    失敗はすべて例外で表す。署名が無い場合の SourceArchiveNotSignedError だけは
    呼び出し側で未署名ポリシーへ振り分ける。
    """

    def decode(
        self,
        metadata: ReleaseMetadata,
        *,
        registry: Registry,
        package: PackageIdentity,
        version: str,
    ) -> DecodedSignature:
        context = {"registry": str(registry), "package": str(package), "version": version}

        source_archive = metadata.source_archive
        if source_archive is None:
            raise MissingSourceArchiveError(**context)

        signing = source_archive.signing
        if signing is None or signing.signature_base64_encoded is None:
            raise SourceArchiveNotSignedError(**context)

        try:
            signature = base64.b64decode(signing.signature_base64_encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise SignatureLoadError(cause=e, **context) from e

        if signing.signature_format is None:
            raise MissingSignatureFormatError(**context)
        try:
            signature_format = SignatureFormat(signing.signature_format)
        except ValueError as e:
            raise UnknownSignatureFormatError(signing.signature_format, **context) from e

        return DecodedSignature(signature=signature, signature_format=signature_format)
