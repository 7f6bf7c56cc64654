"""Key pair generation tests."""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from tlscred.common.errors import CryptoFailure
from tlscred.common.config import KeyType
from tlscred.crypto.keys import generate_key_pair


def test_ec_key_uses_p256():
    key_pair = generate_key_pair(KeyType.EC)
    assert isinstance(key_pair.private_key, ec.EllipticCurvePrivateKey)
    assert key_pair.private_key.curve.name == "secp256r1"
    assert key_pair.public_key.public_numbers() == key_pair.private_key.public_key().public_numbers()


def test_rsa_key_is_2048_bits():
    key_pair = generate_key_pair(KeyType.RSA)
    assert isinstance(key_pair.private_key, rsa.RSAPrivateKey)
    assert key_pair.private_key.key_size == 2048
    assert key_pair.public_key.public_numbers().e == 65537


def test_each_call_generates_a_new_key():
    first = generate_key_pair(KeyType.EC)
    second = generate_key_pair(KeyType.EC)
    assert first.public_key.public_numbers() != second.public_key.public_numbers()


def test_unknown_key_type_is_rejected():
    with pytest.raises(CryptoFailure):
        generate_key_pair("dsa")


@pytest.mark.parametrize("raw, key_class", [("ec", ec.EllipticCurvePrivateKey),
                                            ("rsa", rsa.RSAPrivateKey)])
def test_raw_key_type_string_selects_matching_algorithm(raw, key_class):
    assert isinstance(generate_key_pair(raw).private_key, key_class)
