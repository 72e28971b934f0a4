"""
Command-line interface for the QR handshake.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from qrhandshake.adapters import JsonContactStore, QrCodeRenderer, TextScanner
from qrhandshake.common import setup_logger
from qrhandshake.common.config import Config
from qrhandshake.common.exceptions import (
    ContactStoreError,
    EncodingFailure,
    KeyGenerationFailure,
    MalformedPayload,
    ScanAborted,
)
from qrhandshake.core import (
    FingerprintDeriver,
    HandshakeOrchestrator,
    PayloadDecoder,
    PayloadEncoder,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _contact_store(contacts_file: str | None) -> JsonContactStore:
    if contacts_file:
        return JsonContactStore(Path(contacts_file))
    return JsonContactStore(Config().CONTACTS_FILE_PATH)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: from QRHANDSHAKE_LOG_LEVEL env or INFO)",
)
def cli(log_level: str | None) -> None:
    """QR code public key handshake"""
    level = getattr(logging, log_level.upper()) if log_level else Config().LOG_LEVEL
    setup_logger(logging.getLogger("qrhandshake"), level)


@cli.command()
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False, writable=True),
    help="File to write the QR code image to",
)
@click.option(
    "--format",
    "image_format",
    type=click.Choice(["png", "svg"]),
    default=None,
    help="Image format (default: from the output file extension, else png)",
)
@click.option(
    "--size",
    type=int,
    default=None,
    help="Image width and height in pixels (default: 400)",
)
@click.option(
    "--error-correction",
    type=click.Choice(["L", "M", "Q", "H"], case_sensitive=False),
    default=None,
    help="QR error-correction level (default: M)",
)
@click.option(
    "--print-payload",
    is_flag=True,
    help="Also print the payload text",
)
def show(
    output: str,
    image_format: str | None,
    size: int | None,
    error_correction: str | None,
    print_payload: bool,  # noqa: FBT001
) -> None:
    """Generate a keypair and write its public key as a QR code"""
    output_path = Path(output)
    if image_format is None:
        image_format = "svg" if output_path.suffix.lower() == ".svg" else "png"
    size = size or Config().QR_SIZE

    orchestrator = HandshakeOrchestrator(
        encoder=PayloadEncoder(error_correction=error_correction)
    )
    renderer = QrCodeRenderer(image_format, error_correction=error_correction)
    try:
        payload, image = orchestrator.prepare_outgoing_image(renderer, size, size)
    except (KeyGenerationFailure, EncodingFailure) as err:
        raise click.ClickException(str(err)) from err

    output_path.write_bytes(image)
    click.echo(f"QR code written to {output_path}")
    click.echo(
        "Fingerprint: "
        + FingerprintDeriver.format_for_display(orchestrator.local_fingerprint())
    )
    if print_payload:
        click.echo(payload)


@cli.command()
@click.argument("payload", required=False)
@click.option(
    "--contacts-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Contacts file (default: ~/.qrhandshake/contacts.json)",
)
def accept(payload: str | None, contacts_file: str | None) -> None:
    """Accept a scanned payload and store the contact

    Without PAYLOAD, one line is read from standard input.
    """
    orchestrator = HandshakeOrchestrator(contact_store=_contact_store(contacts_file))
    try:
        if payload is not None:
            _, fingerprint = orchestrator.accept_incoming(payload)
        else:
            scanner = TextScanner(click.get_text_stream("stdin").readline)
            _, fingerprint = orchestrator.accept_scan(scanner)
    except MalformedPayload as err:
        msg = "Invalid QR code"
        raise click.ClickException(msg) from err
    except ScanAborted as err:
        click.echo(f"No code scanned ({err.status.value})")
        return
    except ContactStoreError as err:
        raise click.ClickException(str(err)) from err

    click.echo("Contact added")
    click.echo("Fingerprint: " + FingerprintDeriver.format_for_display(fingerprint))


@cli.command()
@click.argument("payload")
def fingerprint(payload: str) -> None:
    """Print the fingerprint of a payload without storing it"""
    try:
        material = PayloadDecoder().decode(payload)
    except MalformedPayload as err:
        msg = "Invalid QR code"
        raise click.ClickException(msg) from err
    click.echo(FingerprintDeriver.fingerprint(material))


@cli.command()
@click.option(
    "--contacts-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Contacts file (default: ~/.qrhandshake/contacts.json)",
)
def contacts(contacts_file: str | None) -> None:
    """List stored contacts"""
    try:
        stored = _contact_store(contacts_file).load_contacts()
    except ContactStoreError as err:
        raise click.ClickException(str(err)) from err
    if not stored:
        click.echo("No contacts")
        return
    for fp, contact in sorted(stored.items(), key=lambda item: item[1].added_at):
        click.echo(
            f"{FingerprintDeriver.format_for_display(fp)}  "
            f"RSA-{contact.material.key_size}"
        )


if __name__ == "__main__":
    cli()
