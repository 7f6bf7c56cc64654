"""X.509 certificate assembly and signing for CA and leaf roles."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes

from tlscred.common.config import CertificateRole, Config, parse_role
from tlscred.common.errors import CryptoFailure, InvalidSignerReference
from tlscred.crypto.csr import build_request, build_subject_name
from tlscred.crypto.extensions import build_extensions
from tlscred.crypto.keys import KeyPair
from tlscred.crypto.signer import ExternalSigner

logger = logging.getLogger(__name__)

CERTIFICATE_DIGEST = hashes.SHA384


def get_validity_period(days_valid: int):
    """Return (not_before, not_after), both truncated to whole seconds in UTC."""
    start_time = datetime.now(timezone.utc).replace(microsecond=0)
    try:
        end_time = start_time + timedelta(days=days_valid)
    except OverflowError as e:
        raise CryptoFailure(f"days valid {days_valid} is out of range - {e}") from e
    return start_time, end_time


def assemble_certificate(
    config: Config,
    key_pair: KeyPair,
    role: CertificateRole,
    external_signer: Optional[ExternalSigner] = None
) -> x509.CertificateBuilder:
    """
    Build the unsigned X.509 v3 body for a CA or leaf certificate.

    Leaf certificates take their subject from a CSR self-signed with the
    leaf key; CA certificates use the common name directly. The issuer is
    the subject itself when self-signed, otherwise the signer's subject.

    Args:
        config: Issuance config
        key_pair: Subject key pair; its public key is embedded
        role: CertificateRole.CA or CertificateRole.LEAF
        external_signer: Loaded signer, required unless config.self_signed

    Returns:
        CertificateBuilder ready for sign_certificate()

    Raises:
        InvalidSignerReference: If chaining is requested without a signer
        ConfigurationError: If role is not ca or leaf
        CryptoFailure: If the backend rejects a field
    """
    role = parse_role(role)
    if not config.self_signed and external_signer is None:
        raise InvalidSignerReference("chained certificate requested but no signer was loaded")

    if role is CertificateRole.LEAF:
        subject = build_request(config, key_pair).subject
    else:
        subject = build_subject_name(config.common_name)

    if config.self_signed:
        issuer = subject
    else:
        issuer = external_signer.subject

    valid_from, valid_until = get_validity_period(config.days_valid)

    try:
        builder = x509.CertificateBuilder()
        builder = builder.subject_name(subject)
        builder = builder.issuer_name(issuer)
        builder = builder.public_key(key_pair.public_key)
        builder = builder.serial_number(x509.random_serial_number())
        builder = builder.not_valid_before(valid_from)
        builder = builder.not_valid_after(valid_until)

        for extension, is_critical in build_extensions(role, key_pair.public_key):
            builder = builder.add_extension(extension, critical=is_critical)
    except (ValueError, TypeError) as e:
        raise CryptoFailure(f"certificate assembly failed - {e}") from e

    return builder


def sign_certificate(
    builder: x509.CertificateBuilder,
    signing_key,
    digest: Optional[hashes.HashAlgorithm] = None
) -> x509.Certificate:
    """
    Sign an assembled certificate body.

    Args:
        builder: Output of assemble_certificate()
        signing_key: Subject key when self-signed, signer key when chained
        digest: Hash algorithm (default SHA-384)

    Returns:
        Signed certificate

    Raises:
        CryptoFailure: If the backend cannot sign
    """
    if digest is None:
        digest = CERTIFICATE_DIGEST()
    try:
        certificate = builder.sign(signing_key, digest)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise CryptoFailure(f"certificate signing failed - {e}") from e

    logger.debug("Signed certificate serial %x with %s", certificate.serial_number, digest.name)
    return certificate
