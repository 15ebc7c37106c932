"""Common interface for card art downloaders and a simple request driver."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
ImageCallback = Callable[[bytes, str], None]


@dataclass(frozen=True)
class Reply:
    """The answer to one GET request."""

    url: str
    data: bytes = b""
    error: str | None = None


class QueuedClient:
    """Collects GET requests so that a driver can answer them in order."""

    def __init__(self) -> None:
        self.pending: deque[str] = deque()

    def get(self, url: str) -> None:
        """Queue a GET request for ``url``."""
        self.pending.append(url)


class CardArtDownloader(ABC):
    """Downloads card images described by some textual input.

    Listeners may be attached through ``on_progress(progress, target)`` and
    ``on_image_available(image_data, file_name)``.
    """

    def __init__(self) -> None:
        self.on_progress: ProgressCallback | None = None
        self.on_image_available: ImageCallback | None = None

    def _emit_progress(self, progress: int, target: int) -> None:
        if self.on_progress is not None:
            self.on_progress(progress, target)

    def _emit_image(self, image_data: bytes, file_name: str) -> None:
        if self.on_image_available is not None:
            self.on_image_available(image_data, file_name)

    @abstractmethod
    def parse_input(self, text: str) -> None:
        """Parse the input; raise ``ValueError`` when it cannot be used."""

    @abstractmethod
    def begin_download(self, client: QueuedClient) -> bool:
        """Issue the first requests; return False if there is nothing to do."""

    @abstractmethod
    def handle_reply(self, reply: Reply) -> None:
        """Consume the reply to a previously issued request."""

    @abstractmethod
    def files(self) -> list[str]:
        """File names of all front sides."""

    @abstractmethod
    def amount(self, file_name: str) -> int:
        """How many copies of ``file_name`` are wanted."""

    @abstractmethod
    def backside(self, file_name: str) -> str | None:
        """File name of the back of ``file_name``, if it has its own."""

    @abstractmethod
    def duplicates(self, file_name: str) -> list[str]:
        """Extra file names that receive the same image as ``file_name``."""

    @abstractmethod
    def provides_bleed_edge(self) -> bool:
        """Whether downloaded images already carry a bleed edge."""


def run_downloads(
    downloader: CardArtDownloader, fetch: Callable[[str], bytes]
) -> list[str]:
    """Drive ``downloader`` to completion, fetching each URL with ``fetch``.

    Returns the URLs in the order they were fetched. A fetch that raises
    ``OSError`` is logged and answered with an empty reply carrying the error.
    """
    client = QueuedClient()
    if not downloader.begin_download(client):
        log.error("Failed initializing download...")
        return []

    fetched: list[str] = []
    while client.pending:
        url = client.pending.popleft()
        try:
            reply = Reply(url, fetch(url))
        except OSError as exc:
            log.error("Error during request %s: %s", url, exc)
            reply = Reply(url, b"", str(exc))
        fetched.append(url)
        downloader.handle_reply(reply)
    return fetched