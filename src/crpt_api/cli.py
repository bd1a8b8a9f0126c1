"""Command-line interface for the CRPT document client."""

import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import click

from . import __version__
from .cancellation import CancellationToken
from .client import DocumentClient
from .config import DEFAULT_HOST, DEFAULT_VERSION, ApiConfig
from .errors import CrptApiError, SerializationError
from .models import Document, sample_document
from .progress import submission_progress
from .serializer import JsonSerializer


@click.group()
@click.version_option(version=__version__, prog_name="crpt-api")
def cli():
    """
    CRPT API client - submit documents to the registry.

    Submissions are rate limited on the client side so that no more than
    --max-requests documents are sent in any --window seconds.
    """
    pass


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the sample to this file instead of stdout",
)
def sample(output):
    """
    Print an example LP_INTRODUCE_GOODS document as JSON.

    The output can be edited and passed to the submit command.
    """
    serializer = JsonSerializer()
    text = json.dumps(
        serializer.decode(serializer.encode(sample_document())),
        indent=2,
        ensure_ascii=False,
    )
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        click.echo(f"Sample document written to {output}")
    else:
        click.echo(text)


@cli.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@click.option(
    "--signature",
    envvar="CRPT_SIGNATURE",
    help="Document signature (or set CRPT_SIGNATURE env var)",
)
@click.option(
    "--window",
    type=float,
    default=1.0,
    help="Rate-limit window in seconds (default: 1.0)",
)
@click.option(
    "--max-requests",
    type=click.IntRange(min=1),
    default=10,
    help="Maximum submissions per window (default: 10)",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=4,
    help="Number of concurrent submissions (default: 4)",
)
@click.option(
    "--host",
    envvar="CRPT_API_HOST",
    default=DEFAULT_HOST,
    help=f"API host (default: {DEFAULT_HOST}, or set CRPT_API_HOST env var)",
)
@click.option(
    "--api-version",
    envvar="CRPT_API_VERSION",
    default=DEFAULT_VERSION,
    help=f"API version (default: {DEFAULT_VERSION}, or set CRPT_API_VERSION env var)",
)
@click.option(
    "--scheme",
    envvar="CRPT_API_SCHEME",
    type=click.Choice(["https", "http"]),
    default="https",
    help="URL scheme (default: https, or set CRPT_API_SCHEME env var)",
)
@click.option("--no-progress", is_flag=True, help="Disable the progress bar")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def submit(
    files,
    signature,
    window,
    max_requests,
    workers,
    host,
    api_version,
    scheme,
    no_progress,
    verbose,
):
    """
    Submit one or more JSON documents to the registry.

    Every FILE must hold a single document in the registry's JSON format
    (see the sample command). All files are signed with the same signature.
    Exits with status 1 if any submission fails or is rejected.

    Examples:

      # Submit two documents, at most 2 per 10 seconds
      crpt-api submit doc1.json doc2.json --signature "..." --window 10 --max-requests 2
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(message)s")

    if not signature:
        click.echo(
            "Error: signature required. Provide --signature or set CRPT_SIGNATURE.",
            err=True,
        )
        raise click.Abort()
    if window <= 0:
        raise click.BadParameter("must be greater than zero", param_hint="--window")

    serializer = JsonSerializer()
    documents = []
    for path in files:
        try:
            documents.append((path, serializer.decode(Path(path).read_bytes(), Document)))
        except SerializationError as e:
            click.echo(f"Error: {path} is not a valid document: {e}", err=True)
            raise click.Abort()

    config = ApiConfig(host=host, version=api_version, scheme=scheme)
    cancel_token = CancellationToken()
    failures = 0

    with DocumentClient(window, max_requests, config=config, serializer=serializer) as client:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                pool.submit(
                    client.submit_document, document, signature, cancel_token=cancel_token
                ): path
                for path, document in documents
            }
            progress = submission_progress(len(futures), disable=no_progress)
            try:
                for future in as_completed(futures):
                    path = futures[future]
                    try:
                        response = future.result()
                    except CrptApiError as e:
                        failures += 1
                        click.echo(f"{path}: failed: {e}", err=True)
                    else:
                        if not response.ok:
                            failures += 1
                        click.echo(f"{path}: {response.status_code} {response.text}")
                    progress.update(1)
            except KeyboardInterrupt:
                # Release workers still waiting for a slot.
                cancel_token.cancel()
                raise
            finally:
                progress.close()

    if failures:
        click.echo(f"{failures} of {len(documents)} submissions failed", err=True)
        sys.exit(1)
    click.echo(f"Submitted {len(documents)} documents")


if __name__ == "__main__":
    cli()
