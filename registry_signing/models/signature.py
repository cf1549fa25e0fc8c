"""署名フォーマット・署名者・検証結果のモデル。"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from cryptography import x509
from cryptography.x509.oid import NameOID
from pydantic import BaseModel, ConfigDict, Field


class SignatureFormat(str, Enum):
    """サポートする署名エンコーディング。"""

    CMS_1_0_0 = "cms-1.0.0"


class SigningIdentity(BaseModel):
    """署名証明書のサブジェクトから得られる署名者の識別情報。"""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = Field(default=None, description="サブジェクトの CN")
    organizational_unit: Optional[str] = Field(default=None, description="サブジェクトの OU")
    organization: Optional[str] = Field(default=None, description="サブジェクトの O")

    @classmethod
    def from_certificate(cls, certificate: x509.Certificate) -> "SigningIdentity":
        """証明書のサブジェクト情報から署名者を導出する。"""
        subject = certificate.subject

        def _first(oid: x509.ObjectIdentifier) -> Optional[str]:
            attributes = subject.get_attributes_for_oid(oid)
            if not attributes:
                return None
            value = attributes[0].value
            return value.decode("utf-8") if isinstance(value, bytes) else str(value)

        return cls(
            name=_first(NameOID.COMMON_NAME),
            organizational_unit=_first(NameOID.ORGANIZATIONAL_UNIT_NAME),
            organization=_first(NameOID.ORGANIZATION_NAME),
        )

    def __str__(self) -> str:
        parts = [p for p in (self.name, self.organizational_unit, self.organization) if p]
        return ", ".join(parts) if parts else "<unknown signer>"


class SignatureValid(BaseModel):
    """署名・証明書ともに有効。"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["valid"] = "valid"
    signing_identity: SigningIdentity


class SignatureInvalid(BaseModel):
    """署名が暗号学的に不正。"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["invalid"] = "invalid"
    reason: str


class CertificateInvalid(BaseModel):
    """署名証明書が不正（期限切れ・失効など）。"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["certificateInvalid"] = "certificateInvalid"
    reason: str


class CertificateUntrusted(BaseModel):
    """署名は有効だが証明書チェーンが信頼済みルートに到達しない。"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["certificateNotTrusted"] = "certificateNotTrusted"
    signing_identity: SigningIdentity


VerificationOutcome = Annotated[
    Union[SignatureValid, SignatureInvalid, CertificateInvalid, CertificateUntrusted],
    Field(discriminator="kind"),
]
