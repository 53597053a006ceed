"""Target directory resolution and template archive download/extraction."""

from __future__ import annotations

import io
import logging
import shutil
import zipfile
import zlib
from dataclasses import dataclass
from pathlib import Path

import httpx
from rich.markup import escape

import create_kapp
from create_kapp.cli._terminal import Terminal
from create_kapp.cli._types import Template
from create_kapp.config import Settings
from create_kapp.errors import ArchiveError, DownloadError, ExtractionError, PathError

logger = logging.getLogger(__name__)

_ZIP_CONTENT_TYPES = frozenset(
    {"application/zip", "application/x-zip-compressed", "application/octet-stream"}
)


@dataclass(frozen=True)
class ScaffoldRequest:
    """
    Everything needed to fetch and unpack one scaffold.

    Attributes:
        target: Absolute, existing directory the archive is extracted into.
        template: Chosen scaffold.
        owner: GitHub account hosting the archive.
        branch: Branch whose snapshot is downloaded.
    """

    target: Path
    template: Template
    owner: str
    branch: str


def resolve_path(user_path: str) -> Path:
    """Return the canonical absolute directory for *user_path*.

    ``"."`` is the current directory. Any other path is created if missing,
    one level only: a missing parent is an error.

    Raises:
        PathError: The directory cannot be created or canonicalized, or the
            path names something that is not a directory.
    """
    path = Path(user_path)
    try:
        if path != Path("."):
            path.mkdir(exist_ok=True)
        resolved = path.resolve(strict=True)
    except OSError as exc:
        raise PathError(f"Cannot use '{user_path}' as the project directory: {exc}") from exc
    if not resolved.is_dir():
        raise PathError(f"'{user_path}' is not a directory.")

    logger.debug("Resolved %r to %s", user_path, resolved)
    return resolved


def select_template(raw_choice: str) -> Template:
    """Return the matching template, or the default one for unknown names."""
    try:
        return Template(raw_choice)
    except ValueError:
        logger.debug("Unknown template %r, using %s", raw_choice, Template.default().value)
        return Template.default()


def build_archive_url(owner: str, branch: str, host: str = "github.com") -> str:
    # Only the owner and branch select the archive; the chosen template does not.
    return f"https://{host}/{owner}/archive/refs/heads/{branch}.zip"


def open_client(settings: Settings) -> httpx.Client:
    return httpx.Client(
        timeout=settings.timeout,
        follow_redirects=True,
        headers={"User-Agent": f"create-kapp/{create_kapp.__version__}"},
    )


def _download(client: httpx.Client, url: str) -> bytes:
    try:
        response = client.get(url)
    except httpx.HTTPError as exc:
        raise DownloadError(f"Failed to download {url}: {exc}") from exc

    if not response.is_success:
        raise DownloadError(
            f"Failed to download: {response.status_code}", status_code=response.status_code
        )

    content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type and content_type not in _ZIP_CONTENT_TYPES:
        raise DownloadError(
            f"Expected a zip archive from {url}, got '{content_type}'",
            status_code=response.status_code,
        )

    logger.debug("Downloaded %d bytes from %s", len(response.content), url)
    return response.content


def _extract(payload: bytes, target: Path) -> list[str]:
    try:
        archive = zipfile.ZipFile(io.BytesIO(payload))
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Downloaded file is not a valid zip archive: {exc}") from exc

    root = target.resolve()
    written: list[str] = []
    with archive:
        for info in archive.infolist():
            destination = (root / info.filename).resolve()
            if not destination.is_relative_to(root):
                raise ExtractionError(f"Archive entry '{info.filename}' escapes {root}")

            try:
                if info.is_dir():
                    destination.mkdir(parents=True, exist_ok=True)
                    continue
                destination.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(info) as src, destination.open("wb") as dst:
                    shutil.copyfileobj(src, dst)
                mode = (info.external_attr >> 16) & 0o777
                if mode:
                    destination.chmod(mode)
            except zipfile.BadZipFile as exc:
                raise ArchiveError(f"Corrupt archive entry '{info.filename}': {exc}") from exc
            except (zlib.error, RuntimeError, NotImplementedError, EOFError) as exc:
                raise ArchiveError(f"Cannot unpack archive entry '{info.filename}': {exc}") from exc
            except OSError as exc:
                raise ExtractionError(f"Cannot write '{info.filename}': {exc}") from exc

            written.append(info.filename)

    logger.debug("Extracted %d files into %s", len(written), target)
    return written


def fetch_and_extract(
    terminal: Terminal,
    request: ScaffoldRequest,
    settings: Settings,
    client: httpx.Client | None = None,
) -> list[str]:
    """Download the scaffold archive and unpack it into ``request.target``.

    Returns the archive names of the files written. Nothing is cleaned up on
    failure.

    Raises:
        DownloadError: Transport failure, non-2xx status or non-zip response.
        ArchiveError: The body is not a readable zip archive.
        ExtractionError: An entry could not be written.
    """
    url = build_archive_url(request.owner, request.branch, settings.host)
    logger.debug("Archive URL for template %s: %s", request.template.value, url)

    terminal.write_line(f"[info]∂ Downloading template {escape(request.template.value)}...[/]")
    if client is None:
        with open_client(settings) as owned:
            payload = _download(owned, url)
    else:
        payload = _download(client, url)

    terminal.write_line("[primary]Extracting...[/]")
    written = _extract(payload, request.target)

    terminal.write_line("[success]Download and extraction complete![/]")
    return written
