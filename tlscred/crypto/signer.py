"""Load an existing signer certificate and private key from PEM or DER files."""

import logging
from dataclasses import dataclass
from pathlib import Path

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from tlscred.common.errors import CryptoFailure, IOFailure, UnsupportedEncoding

logger = logging.getLogger(__name__)

CERTIFICATE_LOADERS = {
    ".pem": x509.load_pem_x509_certificate,
    ".der": x509.load_der_x509_certificate,
}

PRIVATE_KEY_LOADERS = {
    ".pem": serialization.load_pem_private_key,
    ".der": serialization.load_der_private_key,
}


@dataclass(frozen=True)
class ExternalSigner:
    """Certificate and private key of the CA that signs a chained certificate."""
    certificate: x509.Certificate
    private_key: object

    @property
    def subject(self) -> x509.Name:
        return self.certificate.subject


def _loader_for(path: Path, loaders: dict):
    try:
        return loaders[path.suffix]
    except KeyError:
        raise UnsupportedEncoding(path) from None


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise IOFailure(path, e.strerror or str(e)) from e


def load_signer(certificate_path: Path, private_key_path: Path) -> ExternalSigner:
    """
    Read and decode a signer certificate and its private key.

    The encoding of each file is chosen independently from its extension,
    never from its content.

    Args:
        certificate_path: Path ending in .pem or .der
        private_key_path: Path ending in .pem or .der (unencrypted key)

    Returns:
        ExternalSigner holding the decoded certificate and key

    Raises:
        UnsupportedEncoding: If either extension is not .pem or .der
        IOFailure: If either file cannot be read
        CryptoFailure: If either file cannot be decoded
    """
    certificate_path = Path(certificate_path)
    private_key_path = Path(private_key_path)

    load_key = _loader_for(private_key_path, PRIVATE_KEY_LOADERS)
    load_certificate = _loader_for(certificate_path, CERTIFICATE_LOADERS)

    key_data = _read(private_key_path)
    cert_data = _read(certificate_path)

    try:
        private_key = load_key(key_data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise CryptoFailure(f"cannot decode signer private key {private_key_path} - {e}") from e

    try:
        certificate = load_certificate(cert_data)
    except ValueError as e:
        raise CryptoFailure(f"cannot decode signer certificate {certificate_path} - {e}") from e

    logger.info("Loaded signer %s", certificate.subject.rfc4514_string())
    return ExternalSigner(certificate=certificate, private_key=private_key)
