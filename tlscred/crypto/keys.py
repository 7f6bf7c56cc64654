"""Fresh EC P-256 / RSA-2048 key pair generation."""

import logging
from dataclasses import dataclass
from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from tlscred.common.config import KeyType
from tlscred.common.errors import CryptoFailure

logger = logging.getLogger(__name__)

PrivateKey = Union[ec.EllipticCurvePrivateKey, rsa.RSAPrivateKey]
PublicKey = Union[ec.EllipticCurvePublicKey, rsa.RSAPublicKey]

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537


@dataclass(frozen=True)
class KeyPair:
    """A private key together with its public half."""
    private_key: PrivateKey

    @property
    def public_key(self) -> PublicKey:
        return self.private_key.public_key()


def generate_key_pair(key_type: KeyType) -> KeyPair:
    """
    Generate a new key pair of the requested type.

    Args:
        key_type: KeyType.EC for curve P-256, KeyType.RSA for a 2048-bit modulus

    Returns:
        KeyPair owned by the caller

    Raises:
        CryptoFailure: If the backend cannot produce the key
    """
    try:
        key_type = KeyType(key_type)
    except ValueError:
        raise CryptoFailure(f"unsupported key type {key_type!r}") from None

    try:
        if key_type is KeyType.EC:
            private_key = ec.generate_private_key(ec.SECP256R1())
        else:
            private_key = rsa.generate_private_key(
                public_exponent=RSA_PUBLIC_EXPONENT,
                key_size=RSA_KEY_SIZE
            )
    except (ValueError, UnsupportedAlgorithm) as e:
        raise CryptoFailure(f"key generation failed - {e}") from e

    logger.debug("Generated %s private key", key_type.value)
    return KeyPair(private_key)
