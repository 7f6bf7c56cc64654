"""Shared fixtures: a self-signed CA in memory and on disk."""

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import serialization

from tlscred import issuer
from tlscred.common.config import FileFormat, KeyType, make_config
from tlscred.crypto.signer import ExternalSigner


def self_signed_config(common_name="example", key_type=KeyType.EC,
                       output_format=FileFormat.PEM, days_valid=365):
    return make_config(
        common_name=common_name,
        days_valid=days_valid,
        key_type=key_type,
        output_format=output_format,
        self_signed=True
    )


def chained_config(cert_path, key_path, common_name="leaf", key_type=KeyType.EC,
                   output_format=FileFormat.PEM, days_valid=365):
    return make_config(
        common_name=common_name,
        days_valid=days_valid,
        key_type=key_type,
        output_format=output_format,
        self_signed=False,
        signer_certificate_path=cert_path,
        signer_private_key_path=key_path
    )


@pytest.fixture(scope="session")
def ca_pem():
    """(certificate_pem, private_key_pem) of a self-signed EC CA named 'test-ca'."""
    return issuer.create_ca_certificate(self_signed_config(common_name="test-ca"))


@pytest.fixture(scope="session")
def ca_signer(ca_pem):
    cert_data, key_data = ca_pem
    return ExternalSigner(
        certificate=x509.load_pem_x509_certificate(cert_data),
        private_key=serialization.load_pem_private_key(key_data, password=None)
    )


@pytest.fixture
def ca_files(tmp_path, ca_pem):
    """CA written as test-ca-certificate.pem / test-ca-private-key.pem."""
    cert_path = tmp_path / "test-ca-certificate.pem"
    key_path = tmp_path / "test-ca-private-key.pem"
    cert_path.write_bytes(ca_pem[0])
    key_path.write_bytes(ca_pem[1])
    return cert_path, key_path


@pytest.fixture
def ca_der_files(tmp_path, ca_signer):
    """Same CA written in DER form."""
    cert_path = tmp_path / "test-ca-certificate.der"
    key_path = tmp_path / "test-ca-private-key.der"
    cert_path.write_bytes(ca_signer.certificate.public_bytes(serialization.Encoding.DER))
    key_path.write_bytes(ca_signer.private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    ))
    return cert_path, key_path
