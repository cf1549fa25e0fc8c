"""署名者の Trust On First Use 台帳とのインターフェース。"""

from typing import Optional

from ..models.release import PackageIdentity, Registry
from ..models.signature import SigningIdentity


class PriorTrustLedger:
    """過去に観測した署名者との整合性を記録・報告する台帳。

    並行呼び出しに対する同期は実装側が行う。
    """

    async def reconcile(
        self,
        *,
        registry: Registry,
        package: PackageIdentity,
        version: str,
        signing_identity: Optional[SigningIdentity],
    ) -> None:
        """署名者（無署名なら None）を台帳と照合する。"""
        raise NotImplementedError


class NoopPriorTrustLedger(PriorTrustLedger):
    """台帳ストレージが無い場合のスタブ実装。"""

    async def reconcile(
        self,
        *,
        registry: Registry,
        package: PackageIdentity,
        version: str,
        signing_identity: Optional[SigningIdentity],
    ) -> None:
        return None
