"""リリースメタデータ取得元のインターフェース。"""

from typing import Optional

from ..models.release import PackageIdentity, ReleaseMetadata


class ReleaseMetadataProvider:
    """レジストリからバージョン単位のメタデータを取得するインターフェース。"""

    async def get_metadata(
        self, package: PackageIdentity, version: str, *, timeout: Optional[float] = None
    ) -> ReleaseMetadata:
        """メタデータを取得する。失敗時は任意の例外を送出してよい。"""
        raise NotImplementedError
