"""Pydantic model for a single issuance request, plus parsers for its enum fields."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from tlscred.common.errors import ConfigurationError


class KeyType(str, Enum):
    """Asymmetric key algorithm of the issued key pair."""
    EC = "ec"
    RSA = "rsa"


class FileFormat(str, Enum):
    """Encoding used for both the certificate and the private key."""
    PEM = "pem"
    DER = "der"


class CertificateRole(str, Enum):
    """Whether the issued certificate may sign other certificates."""
    CA = "ca"
    LEAF = "leaf"


class Config(BaseModel):
    """Immutable description of one certificate issuance."""
    model_config = ConfigDict(frozen=True)

    common_name: str = Field(..., min_length=1, description="Subject CN")
    days_valid: int = Field(..., ge=0, description="Validity length in days from issuance")
    key_type: KeyType = Field(KeyType.EC, description="ec (P-256) or rsa (2048 bits)")
    output_format: FileFormat = Field(FileFormat.PEM, description="pem or der, for both outputs")
    self_signed: bool = Field(..., description="Sign with the generated key instead of a signer")
    signer_certificate_path: Optional[Path] = Field(None, description="PEM or DER signer certificate")
    signer_private_key_path: Optional[Path] = Field(None, description="PEM or DER signer private key")

    @model_validator(mode="after")
    def check_signer_paths(self):
        has_cert = self.signer_certificate_path is not None
        has_key = self.signer_private_key_path is not None
        if has_cert != has_key:
            raise ValueError(
                "signer certificate path and signer private key path must be given together"
            )
        if self.self_signed == has_cert:
            raise ValueError(
                "self_signed must be true exactly when no signer is supplied"
            )
        return self


def make_config(**fields) -> Config:
    """
    Build a validated Config.

    Args:
        **fields: Config field values

    Returns:
        Frozen Config instance

    Raises:
        ConfigurationError: If any field is missing or invalid
    """
    try:
        return Config(**fields)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(problems) from e


def parse_key_type(raw: Optional[str]) -> KeyType:
    """Parse 'ec' or 'rsa' (case-insensitive) into a KeyType."""
    try:
        return KeyType((raw or "").lower())
    except ValueError:
        raise ConfigurationError(f"invalid key type '{raw}' (expected ec or rsa)") from None


def parse_output_format(raw: Optional[str]) -> FileFormat:
    """Parse 'pem' or 'der' (case-insensitive) into a FileFormat."""
    try:
        return FileFormat((raw or "").lower())
    except ValueError:
        raise ConfigurationError(f"invalid output format '{raw}' (expected pem or der)") from None


def parse_role(raw) -> CertificateRole:
    """Parse 'ca' or 'leaf' (or a CertificateRole) into a CertificateRole."""
    try:
        return CertificateRole(raw)
    except ValueError:
        raise ConfigurationError(f"invalid certificate role '{raw}' (expected ca or leaf)") from None
