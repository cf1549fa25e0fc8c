"""署名検証器のインターフェース。"""

from typing import Optional

from ..models.security import VerifierConfiguration
from ..models.signature import SignatureFormat, VerificationOutcome


class SignatureVerifier:
    """署名と証明書チェーンを検証する外部コンポーネントのインターフェース。

    暗号処理そのものは実装側の責務とし、結果は VerificationOutcome に分類して返す。
    """

    async def verify(
        self,
        *,
        signature: bytes,
        content: bytes,
        signature_format: SignatureFormat,
        configuration: VerifierConfiguration,
        timeout: Optional[float] = None,
    ) -> VerificationOutcome:
        """署名を検証する。`timeout` はヒントとして扱ってよい。"""
        raise NotImplementedError
