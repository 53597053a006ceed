"""Shared fixtures for the create-kapp test suite."""

from __future__ import annotations

import io
import zipfile
from collections.abc import Callable

import httpx
import pytest

from create_kapp.cli._terminal import Terminal

Handler = Callable[[httpx.Request], httpx.Response]


def make_zip(entries: dict[str, bytes]) -> bytes:
    """Build an in-memory zip archive; names ending in ``/`` become directories."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def terminal(output: io.StringIO) -> Terminal:
    return Terminal(file=output)


@pytest.fixture
def two_file_zip() -> bytes:
    return make_zip({"README.md": b"# hello\n", "index.js": b"console.log('hi');\n"})


@pytest.fixture
def requests_seen() -> list[httpx.Request]:
    return []


@pytest.fixture
def archive_client(requests_seen: list[httpx.Request]) -> Callable[[Handler], httpx.Client]:
    """Return a factory for clients whose requests are answered by *handler*."""

    def factory(handler: Handler) -> httpx.Client:
        def recording(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        return httpx.Client(transport=httpx.MockTransport(recording))

    return factory


@pytest.fixture
def make_archive() -> Callable[[dict[str, bytes]], bytes]:
    return make_zip


@pytest.fixture(autouse=True)
def _plain_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep rich's colour detection independent of the CI environment."""
    for name in ("FORCE_COLOR", "NO_COLOR", "TTY_COMPATIBLE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def damaged_zip() -> bytes:
    """A deflated archive with intact headers but corrupted compressed data."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("README.md", bytes(range(256)) * 20)
    payload = bytearray(buffer.getvalue())
    data_start = 30 + len("README.md")
    for offset in range(data_start + 2, data_start + 22):
        payload[offset] ^= 0xFF
    return bytes(payload)
