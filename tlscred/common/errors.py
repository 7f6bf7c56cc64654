"""Error kinds raised while issuing certificates and keys."""

from pathlib import Path
from typing import Optional


class CredentialError(ValueError):
    """Base class for every failure of a certificate issuance."""

    code = "CREDENTIAL_FAIL"

    def __init__(self, message: str):
        super().__init__(f"{self.code}: {message}")
        self.detail = message


class ConfigurationError(CredentialError):
    """Invalid key type, output format or signer combination."""

    code = "BAD_CONFIG"


class UnsupportedEncoding(ConfigurationError):
    """Signer file extension is neither .pem nor .der."""

    code = "BAD_ENCODING"

    def __init__(self, path: Path):
        super().__init__(
            f"unsupported file extension '{path.suffix}' for {path} (expected .pem or .der)"
        )
        self.path = path


class CryptoFailure(CredentialError):
    """The cryptographic backend rejected an operation."""

    code = "CRYPTO_FAIL"


class IOFailure(CredentialError):
    """A required file could not be read or written."""

    code = "IO_FAIL"

    def __init__(self, path: Path, reason: Optional[str] = None):
        message = f"cannot access {path}"
        if reason:
            message = f"{message} - {reason}"
        super().__init__(message)
        self.path = path


class InvalidSignerReference(CredentialError):
    """Chaining was requested but the signer material is missing or unusable."""

    code = "BAD_SIGNER"


class EncodingFailure(CredentialError):
    """The certificate or private key could not be serialized."""

    code = "ENCODE_FAIL"
