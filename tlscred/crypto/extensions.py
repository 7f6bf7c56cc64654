"""X.509 extension sets per certificate role."""

from cryptography import x509

from tlscred.common.config import CertificateRole


def _key_usage(**granted) -> x509.KeyUsage:
    usages = dict(
        digital_signature=False,
        content_commitment=False,
        key_encipherment=False,
        data_encipherment=False,
        key_agreement=False,
        key_cert_sign=False,
        crl_sign=False,
        encipher_only=False,
        decipher_only=False
    )
    usages.update(granted)
    return x509.KeyUsage(**usages)


# (basic constraints, critical), (key usage, critical)
ROLE_EXTENSIONS = {
    CertificateRole.CA: (
        (x509.BasicConstraints(ca=True, path_length=None), True),
        (_key_usage(key_cert_sign=True, crl_sign=True), True),
    ),
    CertificateRole.LEAF: (
        (x509.BasicConstraints(ca=False, path_length=None), False),
        (_key_usage(
            content_commitment=True,
            digital_signature=True,
            key_encipherment=True
        ), True),
    ),
}


def empty_authority_key_identifier() -> x509.AuthorityKeyIdentifier:
    """AuthorityKeyIdentifier carrying neither a key id nor issuer/serial."""
    return x509.AuthorityKeyIdentifier(
        key_identifier=None,
        authority_cert_issuer=None,
        authority_cert_serial_number=None
    )


def build_extensions(role: CertificateRole, subject_public_key) -> list:
    """
    Build the ordered extension list for a certificate role.

    The same list is produced for self-signed and chained certificates; only
    the issuer name and the signing key differ between those modes.

    Args:
        role: CertificateRole.CA or CertificateRole.LEAF
        subject_public_key: Public key embedded in the certificate

    Returns:
        List of (extension, critical) tuples
    """
    extensions = list(ROLE_EXTENSIONS[role])
    extensions.append((x509.SubjectKeyIdentifier.from_public_key(subject_public_key), False))
    extensions.append((empty_authority_key_identifier(), False))
    return extensions
