"""
TLS Credential Helper
Command-line tool creating key pairs and certificates for use with TLS.
"""

import argparse
import logging
import os
import sys
import uuid
from pathlib import Path

from dotenv import load_dotenv

from tlscred import issuer
from tlscred.common.config import (
    Config, FileFormat, KeyType, make_config, parse_key_type, parse_output_format
)
from tlscred.common.errors import CredentialError, IOFailure
from tlscred.storage.output import credential_paths, resolve_output_directory, write_credentials

logger = logging.getLogger(__name__)

SUBCOMMANDS = {
    "create-ca-certificate": ("Create a CA certificate and a key pair.", True),
    "create-certificate": ("Create a certificate and a key pair.", False),
}


class CreateAborted(Exception):
    """The user declined the confirmation prompt."""


def add_create_arguments(parser: argparse.ArgumentParser):
    """Register the arguments shared by both create subcommands."""
    parser.add_argument(
        "--output-format",
        default=os.getenv("TCH_OUTPUT_FORMAT", FileFormat.PEM.value),
        choices=[f.value for f in FileFormat],
        help="Sets the output file format."
    )
    parser.add_argument(
        "--key-type",
        default=os.getenv("TCH_KEY_TYPE", KeyType.EC.value),
        choices=[k.value for k in KeyType],
        help="Sets the type of the created keys."
    )
    parser.add_argument(
        "--days-valid",
        type=int,
        required=True,
        help="How many days from today the created certificate will be valid for."
    )
    parser.add_argument(
        "--output-directory",
        default=os.getenv("TCH_OUTPUT_DIRECTORY", "."),
        help="Sets the output directory."
    )
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Runs the CLI in no-input mode."
    )

    name_group = parser.add_mutually_exclusive_group(required=True)
    name_group.add_argument(
        "--common-name",
        help="Sets the created certificate's common name to the provided value."
    )
    name_group.add_argument(
        "--random-common-name",
        action="store_true",
        help="Sets the created certificate's common name to a generated version 4 UUID."
    )

    parser.add_argument(
        "--self-signed",
        action="store_true",
        help="Sign the created certificate with the created private key instead of "
             "an existing signer given via --signer-certificate-path and "
             "--signer-private-key-path."
    )
    parser.add_argument(
        "--signer-certificate-path",
        help="A path to an existing pem or der encoded signer certificate to use."
    )
    parser.add_argument(
        "--signer-private-key-path",
        help="A path to an existing pem or der encoded signer private key to use."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging."
    )


def setup_argument_parser() -> argparse.ArgumentParser:
    """Configure command-line interface."""
    parser = argparse.ArgumentParser(
        prog="tch",
        description="Creation of key pairs and certificates for use with TLS."
    )
    subparsers = parser.add_subparsers(dest="command")
    for name, (help_text, _) in SUBCOMMANDS.items():
        subparser = subparsers.add_parser(name, help=help_text, description=help_text)
        add_create_arguments(subparser)
    return parser


def check_signer_arguments(parser: argparse.ArgumentParser, args):
    """Enforce --self-signed versus the pair of signer paths."""
    signer_paths = [args.signer_certificate_path, args.signer_private_key_path]
    if args.self_signed:
        if any(signer_paths):
            parser.error("--self-signed cannot be combined with signer paths")
    elif not all(signer_paths):
        parser.error(
            "--signer-certificate-path and --signer-private-key-path are required "
            "unless --self-signed is given"
        )


def resolve_existing(raw_path) -> Path:
    """Absolute path of an existing file, as given on the command line."""
    path = Path(raw_path)
    try:
        return path.resolve(strict=True)
    except OSError as e:
        raise IOFailure(path, e.strerror or str(e)) from e


def build_config(args) -> Config:
    """Translate parsed arguments into an issuance Config."""
    common_name = args.common_name or str(uuid.uuid4())

    signer_certificate_path = None
    signer_private_key_path = None
    if not args.self_signed:
        signer_certificate_path = resolve_existing(args.signer_certificate_path)
        signer_private_key_path = resolve_existing(args.signer_private_key_path)

    return make_config(
        common_name=common_name,
        days_valid=args.days_valid,
        key_type=parse_key_type(args.key_type),
        output_format=parse_output_format(args.output_format),
        self_signed=args.self_signed,
        signer_certificate_path=signer_certificate_path,
        signer_private_key_path=signer_private_key_path
    )


def describe_path(path) -> str:
    return str(path) if path is not None else "not applicable"


def confirm(config: Config, is_ca: bool, output_directory: Path,
            certificate_path: Path, private_key_path: Path, input_func=input):
    """
    Show the pending configuration and ask the user to proceed.

    Raises:
        CreateAborted: If the answer is anything other than '', 'y' or 'Y'
    """
    kind = "A CA certificate" if is_ca else "A certificate"
    print(f"{kind} and private key will be created using the following configuration.")
    print()
    print(f"key type: {config.key_type.value}")
    print(f"common name: {config.common_name}")
    print(f"days valid: {config.days_valid} (which is {config.days_valid / 365} years)")
    print(f"self-signed: {str(config.self_signed).lower()}")
    print(f"signer certificate path: {describe_path(config.signer_certificate_path)}")
    print(f"signer private key path: {describe_path(config.signer_private_key_path)}")
    print(f"output directory: {output_directory}")
    print()
    print('WARNING Double check "days valid" above. Inconsiderate values can have '
          'devastating consequences.')
    if config.self_signed:
        print("WARNING You are creating a self-signed certificate.")
    print()
    print(f"create {private_key_path}")
    print(f"create {certificate_path}")
    print()

    try:
        answer = input_func("execute (Y/n): ")
    except EOFError:
        answer = ""
    if answer.strip() not in ("", "y", "Y"):
        raise CreateAborted()


def run_create(args, is_ca: bool, input_func=input) -> int:
    """Issue and persist one certificate according to parsed arguments."""
    config = build_config(args)
    output_directory = resolve_output_directory(args.output_directory)
    certificate_path, private_key_path = credential_paths(
        output_directory, config.common_name, config.output_format, is_ca
    )

    if not args.no_input:
        try:
            confirm(config, is_ca, output_directory, certificate_path,
                    private_key_path, input_func)
        except CreateAborted:
            logger.info("Creation aborted by user")
            return 0

    if is_ca:
        certificate_bytes, private_key_bytes = issuer.create_ca_certificate(config)
    else:
        certificate_bytes, private_key_bytes = issuer.create_certificate(config)

    write_credentials(certificate_path, private_key_path, certificate_bytes, private_key_bytes)

    if args.no_input:
        print(f"created {private_key_path}")
        print(f"created {certificate_path}")
    return 0


def main(argv=None, input_func=input) -> int:
    """Entry point for the tch console script."""
    load_dotenv()
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    check_signer_arguments(parser, args)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    _, is_ca = SUBCOMMANDS[args.command]
    try:
        return run_create(args, is_ca, input_func)
    except (CredentialError, OSError) as e:
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
