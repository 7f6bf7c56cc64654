"""
Certificate issuance pipeline.
Generates a key pair, assembles and signs the certificate, and returns the encoded bytes.
"""

import logging
from typing import Callable, Optional, Tuple

from tlscred.common.config import CertificateRole, Config, parse_role
from tlscred.common.errors import CryptoFailure, InvalidSignerReference, IOFailure
from tlscred.crypto.certificate import assemble_certificate, sign_certificate
from tlscred.crypto.encoding import encode
from tlscred.crypto.keys import generate_key_pair
from tlscred.crypto.signer import ExternalSigner, load_signer

logger = logging.getLogger(__name__)

SignerLoader = Callable[..., ExternalSigner]


def resolve_signer(config: Config, signer_loader: SignerLoader) -> Optional[ExternalSigner]:
    """Load the external signer for chained configs; None when self-signed."""
    if config.self_signed:
        return None

    try:
        return signer_loader(config.signer_certificate_path, config.signer_private_key_path)
    except (IOFailure, CryptoFailure) as e:
        raise InvalidSignerReference(f"cannot load signer - {e}") from e


def issue(
    config: Config,
    role: CertificateRole,
    signer_loader: SignerLoader = load_signer
) -> Tuple[bytes, bytes]:
    """
    Issue one certificate and its private key.

    Args:
        config: Validated issuance config
        role: CertificateRole.CA or CertificateRole.LEAF
        signer_loader: Called with the two signer paths when not self-signed

    Returns:
        (certificate_bytes, private_key_bytes) in config.output_format

    Raises:
        CredentialError: Any subclass; nothing is returned on failure
    """
    role = parse_role(role)
    logger.info(
        "Issuing %s certificate for CN=%s (%s, %s days, %s)",
        role.value, config.common_name, config.key_type.value, config.days_valid,
        "self-signed" if config.self_signed else "chained"
    )

    key_pair = generate_key_pair(config.key_type)
    external_signer = resolve_signer(config, signer_loader)

    builder = assemble_certificate(config, key_pair, role, external_signer)
    if external_signer is None:
        signing_key = key_pair.private_key
    else:
        signing_key = external_signer.private_key
    certificate = sign_certificate(builder, signing_key)

    return encode(certificate, key_pair.private_key, config.output_format)


def create_ca_certificate(config: Config, signer_loader: SignerLoader = load_signer):
    """Issue a CA certificate and private key."""
    return issue(config, CertificateRole.CA, signer_loader)


def create_certificate(config: Config, signer_loader: SignerLoader = load_signer):
    """Issue a leaf certificate and private key."""
    return issue(config, CertificateRole.LEAF, signer_loader)
