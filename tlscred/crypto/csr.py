"""Self-signed certificate signing request for the leaf path."""

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.x509.oid import NameOID

from tlscred.common.config import Config
from tlscred.common.errors import CryptoFailure
from tlscred.crypto.keys import KeyPair


def build_subject_name(common_name: str) -> x509.Name:
    """X.509 name with a single CN attribute."""
    try:
        return x509.Name([
            x509.NameAttribute(NameOID.COMMON_NAME, common_name),
        ])
    except ValueError as e:
        raise CryptoFailure(f"invalid common name '{common_name}' - {e}") from e


def build_request(config: Config, key_pair: KeyPair) -> x509.CertificateSigningRequest:
    """
    Build a CSR binding the leaf public key to its subject name.

    Args:
        config: Issuance config providing the common name
        key_pair: Leaf key pair; its private key signs the request

    Returns:
        CSR signed with SHA-256, without extensions

    Raises:
        CryptoFailure: If the name is rejected or signing fails
    """
    builder = x509.CertificateSigningRequestBuilder()
    builder = builder.subject_name(build_subject_name(config.common_name))
    try:
        return builder.sign(key_pair.private_key, hashes.SHA256())
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise CryptoFailure(f"signing request failed - {e}") from e
