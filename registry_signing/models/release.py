"""レジストリ・パッケージ・リリースメタデータのモデル。"""

import re
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

SOURCE_ARCHIVE_RESOURCE_NAME = "source-archive"

_SCOPE_PATTERN = re.compile(r"\A[a-zA-Z0-9](?:[a-zA-Z0-9]|-(?=[a-zA-Z0-9])){0,38}\Z")
_NAME_PATTERN = re.compile(r"\A[a-zA-Z0-9](?:[a-zA-Z0-9]|[-_](?=[a-zA-Z0-9])){0,99}\Z")


class Registry(BaseModel):
    """パッケージレジストリ。"""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="レジストリのベース URL")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """http(s) かつホストを持つ URL のみ許可する。"""
        value = v.strip().rstrip("/")
        parsed = urlparse(value)
        if parsed.scheme not in {"http", "https"} or not parsed.hostname:
            raise ValueError(f"invalid registry URL: {v!r}")
        return value

    @property
    def host(self) -> str:
        """設定の上書きキーとして使うホスト名 (小文字)。"""
        return (urlparse(self.url).hostname or "").lower()

    def __str__(self) -> str:
        return self.url


class PackageIdentity(BaseModel):
    """`scope.name` 形式のレジストリパッケージ識別子。

    比較は大文字小文字を区別しないため、値は小文字へ正規化して保持する。
    """

    model_config = ConfigDict(frozen=True)

    scope: str
    name: str

    @field_validator("scope")
    @classmethod
    def validate_scope(cls, v: str) -> str:
        if not _SCOPE_PATTERN.match(v):
            raise ValueError(f"invalid package scope: {v!r}")
        return v.lower()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not _NAME_PATTERN.match(v):
            raise ValueError(f"invalid package name: {v!r}")
        return v.lower()

    @classmethod
    def parse(cls, identity: str) -> "PackageIdentity":
        """`scope.name` 文字列から識別子を生成する。"""
        scope, separator, name = identity.partition(".")
        if not separator:
            raise ValueError(f"package identity must be 'scope.name': {identity!r}")
        return cls(scope=scope, name=name)

    def __str__(self) -> str:
        return f"{self.scope}.{self.name}"


class ResourceSigning(BaseModel):
    """リソースに付随する署名情報。"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    signature_base64_encoded: Optional[str] = Field(
        default=None, alias="signatureBase64Encoded", description="Base64 エンコード済み署名"
    )
    signature_format: Optional[str] = Field(
        default=None, alias="signatureFormat", description="署名フォーマットのトークン"
    )


class ReleaseResource(BaseModel):
    """リリースに含まれるリソース。"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    type: str = "application/zip"
    checksum: Optional[str] = None
    signing: Optional[ResourceSigning] = None


class ReleaseMetadata(BaseModel):
    """レジストリが返すバージョン単位のメタデータ。"""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: Optional[str] = None
    version: Optional[str] = None
    resources: List[ReleaseResource] = Field(default_factory=list)

    @property
    def source_archive(self) -> Optional[ReleaseResource]:
        """ソースアーカイブのリソースを返す（存在しなければ None）。"""
        for resource in self.resources:
            if resource.name == SOURCE_ARCHIVE_RESOURCE_NAME:
                return resource
        return None
