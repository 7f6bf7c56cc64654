"""Serialize a certificate and its private key to PEM or DER."""

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from tlscred.common.config import FileFormat
from tlscred.common.errors import EncodingFailure

ENCODINGS = {
    FileFormat.PEM: serialization.Encoding.PEM,
    FileFormat.DER: serialization.Encoding.DER,
}


def encode(certificate: x509.Certificate, private_key, output_format: FileFormat):
    """
    Encode certificate and unencrypted PKCS#8 private key.

    Returns:
        (certificate_bytes, private_key_bytes)

    Raises:
        EncodingFailure: If either object cannot be serialized
    """
    try:
        encoding = ENCODINGS[output_format]
    except KeyError:
        raise EncodingFailure(f"unsupported output format {output_format!r}") from None

    try:
        cert_data = certificate.public_bytes(encoding)
        key_data = private_key.private_bytes(
            encoding=encoding,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption()
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise EncodingFailure(f"serialization failed - {e}") from e

    return cert_data, key_data
