"""Output file naming and writing for issued credentials."""

from pathlib import Path
from typing import Tuple

from tlscred.common.config import FileFormat
from tlscred.common.errors import IOFailure


def credential_paths(
    output_directory: Path,
    common_name: str,
    output_format: FileFormat,
    is_ca: bool
) -> Tuple[Path, Path]:
    """
    Determine certificate and private key paths.

    Files are named <cn>[-ca]-certificate.<ext> and <cn>[-ca]-private-key.<ext>.

    Returns:
        (certificate_path, private_key_path)
    """
    prefix = f"{common_name}-ca" if is_ca else common_name
    extension = output_format.value
    return (
        output_directory / f"{prefix}-certificate.{extension}",
        output_directory / f"{prefix}-private-key.{extension}",
    )


def resolve_output_directory(output_directory) -> Path:
    """Return the absolute path of an existing output directory."""
    path = Path(output_directory)
    try:
        resolved = path.resolve(strict=True)
    except OSError as e:
        raise IOFailure(path, e.strerror or str(e)) from e
    if not resolved.is_dir():
        raise IOFailure(path, "not a directory")
    return resolved


def write_credentials(
    certificate_path: Path,
    private_key_path: Path,
    certificate_bytes: bytes,
    private_key_bytes: bytes
):
    """Write the certificate, then the private key."""
    for destination, data in ((certificate_path, certificate_bytes),
                              (private_key_path, private_key_bytes)):
        try:
            destination.write_bytes(data)
        except OSError as e:
            raise IOFailure(destination, e.strerror or str(e)) from e
