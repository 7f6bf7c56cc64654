"""Signer loading tests: extension-driven decoding and failure kinds."""

import pytest

from tlscred.common.errors import CryptoFailure, IOFailure, UnsupportedEncoding
from tlscred.crypto.signer import load_signer


def test_load_pem_signer(ca_files, ca_signer):
    signer = load_signer(*ca_files)
    assert signer.subject == ca_signer.certificate.subject
    assert signer.private_key.public_key() == ca_signer.certificate.public_key()


def test_load_der_signer(ca_der_files, ca_signer):
    signer = load_signer(*ca_der_files)
    assert signer.certificate == ca_signer.certificate


def test_each_file_encoding_is_chosen_independently(ca_files, ca_der_files, ca_signer):
    pem_cert, pem_key = ca_files
    der_cert, der_key = ca_der_files
    assert load_signer(der_cert, pem_key).certificate == ca_signer.certificate
    assert load_signer(pem_cert, der_key).certificate == ca_signer.certificate


def test_txt_key_extension_is_unsupported(ca_files, tmp_path):
    cert_path, key_path = ca_files
    txt_key = tmp_path / "test-ca-private-key.txt"
    txt_key.write_bytes(key_path.read_bytes())
    with pytest.raises(UnsupportedEncoding) as excinfo:
        load_signer(cert_path, txt_key)
    assert excinfo.value.path == txt_key


def test_unsupported_extension_is_reported_before_reading(tmp_path):
    missing_cert = tmp_path / "missing.crt"
    with pytest.raises(UnsupportedEncoding):
        load_signer(missing_cert, tmp_path / "missing.pem")


def test_missing_file_is_an_io_failure(ca_files, tmp_path):
    cert_path, _ = ca_files
    missing_key = tmp_path / "missing.pem"
    with pytest.raises(IOFailure) as excinfo:
        load_signer(cert_path, missing_key)
    assert excinfo.value.path == missing_key


def test_encoding_is_not_sniffed_from_content(ca_files, tmp_path):
    cert_path, key_path = ca_files
    mislabelled = tmp_path / "key-really-pem.der"
    mislabelled.write_bytes(key_path.read_bytes())
    with pytest.raises(CryptoFailure):
        load_signer(cert_path, mislabelled)


def test_garbage_certificate_is_a_crypto_failure(ca_files, tmp_path):
    _, key_path = ca_files
    garbage = tmp_path / "garbage.pem"
    garbage.write_bytes(b"not a certificate")
    with pytest.raises(CryptoFailure, match="signer certificate"):
        load_signer(garbage, key_path)
