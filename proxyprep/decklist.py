"""Download card art for a Moxfield or Archidekt decklist from Scryfall."""

from __future__ import annotations

import json
import logging
import re
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .downloader import CardArtDownloader, QueuedClient, Reply

log = logging.getLogger(__name__)

# Moxfield:  "Nx Name (SET) CN"
# Archidekt: "N Name (SET) CN ..."
_DECKLIST_RE = re.compile(r'(\d+)x? "?(.*)"? \(([^ ]+)\) ((.*-)?\d+)')
_FORBIDDEN_CHARS = re.compile(r'[\\/:*?"<>|]')
_LINE_SPLIT = re.compile(r"[\r\n]")

_CARD_API = "https://api.scryfall.com/cards"
_DEFAULT_BACK_URI = "http://cards.scryfall.io/back.png"
_DEFAULT_BACK_NAME = "__back.png"

_DOUBLE_SIDED_LAYOUTS = frozenset(
    {"transform", "modal_dfc", "double_faced_token", "reversible_card"}
)


@dataclass
class DecklistCard:
    """One line of a decklist."""

    name: str = ""
    file_name: str = ""
    amount: int = 0
    set_code: str | None = None
    collector_number: str | None = None
    has_backside: bool = False


@dataclass
class _BacksideRequest:
    uri: str
    front: DecklistCard


def decklist_regex() -> re.Pattern[str]:
    """The pattern that recognises a decklist line."""
    return _DECKLIST_RE


def _make_file_name(
    name: str, set_code: str | None, collector_number: str | None
) -> str:
    if set_code is not None:
        if collector_number is not None:
            raw = f"{name} ({set_code}) {collector_number}.png"
        else:
            raw = f"{name} ({set_code}).png"
    else:
        raw = f"{name}.png"
    return _FORBIDDEN_CHARS.sub("", raw)


def parse_deckline(line: str) -> DecklistCard:
    """Parse one decklist line; raise ``ValueError`` if it is not one."""
    match = _DECKLIST_RE.search(line)
    if match is None:
        raise ValueError(f"not a decklist line: {line!r}")
    name = match.group(2)
    set_code = match.group(3)
    collector_number = match.group(4)
    return DecklistCard(
        name=name,
        file_name=_make_file_name(name, set_code, collector_number),
        amount=int(match.group(1)),
        set_code=set_code,
        collector_number=collector_number,
    )


def has_backside(card_info: Any) -> bool:
    """Whether a Scryfall card object describes a double-faced card."""
    if not isinstance(card_info, dict):
        return False
    layout = card_info.get("layout")
    return isinstance(layout, str) and layout in _DOUBLE_SIDED_LAYOUTS


def backside_filename(file_name: str) -> str:
    """File name used for the back of ``file_name``."""
    return f"__back_{file_name}" if file_name else _DEFAULT_BACK_NAME


def _lookup(value: Any, *keys: str | int) -> str:
    for key in keys:
        if isinstance(key, int):
            found = isinstance(value, list) and 0 <= key < len(value)
        else:
            found = isinstance(value, dict) and key in value
        if not found:
            return ""
        value = value[key]
    return value if isinstance(value, str) else ""


def _parse_json(data: bytes) -> Any:
    try:
        return json.loads(data)
    except ValueError:
        return {}


class ScryfallDownloader(CardArtDownloader):
    """Fetches card data and images from Scryfall, one request at a time."""

    def __init__(
        self, skip_files: Iterable[str] = (), request_interval: float = 0.1
    ) -> None:
        super().__init__()
        self._skip_files = list(skip_files)
        self._request_interval = request_interval
        self._cards: list[DecklistCard] = []
        self._index_by_file: dict[str, int] = {}
        self._card_infos: list[Any] = []
        self._backsides: list[_BacksideRequest] = []
        self._downloads = 0
        self._total_requests = 0
        self._client: QueuedClient | None = None

    def parse_input(self, text: str) -> None:
        for line in filter(None, _LINE_SPLIT.split(text)):
            if _DECKLIST_RE.search(line) is None:
                continue
            card = parse_deckline(line)
            self._cards.append(card)
            self._index_by_file[card.file_name] = len(self._cards) - 1

    def begin_download(self, client: QueuedClient) -> bool:
        self._total_requests = len(self._cards) * 2
        if _DEFAULT_BACK_NAME not in self._skip_files:
            self._total_requests += 1
            self._backsides.append(_BacksideRequest(_DEFAULT_BACK_URI, DecklistCard()))
        self._emit_progress(0, self._total_requests)
        self._client = client
        return self._next_request()

    def handle_reply(self, reply: Reply) -> None:
        cards_in_deck = len(self._cards)
        if len(self._card_infos) < cards_in_deck:
            self._card_infos.append(_parse_json(reply.data))
            self._emit_progress(len(self._card_infos), self._total_requests)
        elif self._downloads < cards_in_deck:
            self._deliver(reply, self._cards[self._downloads].file_name)
        elif self._downloads < cards_in_deck + len(self._backsides):
            request = self._backsides[self._downloads - cards_in_deck]
            self._deliver(reply, backside_filename(request.front.file_name))

        if self._request_interval > 0:
            time.sleep(self._request_interval)
        self._next_request()

    def files(self) -> list[str]:
        return [card.file_name for card in self._cards]

    def amount(self, file_name: str) -> int:
        return self._cards[self._index_by_file[file_name]].amount

    def backside(self, file_name: str) -> str | None:
        if has_backside(self._card_infos[self._index_by_file[file_name]]):
            return backside_filename(file_name)
        return None

    def duplicates(self, file_name: str) -> list[str]:
        return []

    def provides_bleed_edge(self) -> bool:
        return False

    def _deliver(self, reply: Reply, file_name: str) -> None:
        log.info("Received data of %s", file_name)
        self._emit_image(reply.data, file_name)
        self._downloads += 1
        self._emit_progress(
            self._downloads + len(self._card_infos), self._total_requests
        )

    def _request(self, url: str) -> None:
        if self._client is None:
            raise RuntimeError("download has not begun")
        self._client.get(url)

    def _next_request(self) -> bool:
        cards_in_deck = len(self._cards)
        while True:
            if len(self._card_infos) < cards_in_deck:
                card = self._cards[len(self._card_infos)]
                if card.set_code is None or card.collector_number is None:
                    return False
                log.info("Requesting info for card %s", card.name)
                self._request(f"{_CARD_API}/{card.set_code}/{card.collector_number}")
                return True

            if self._downloads < cards_in_deck:
                card = self._cards[self._downloads]
                card_info = self._card_infos[self._downloads]
                double_sided = has_backside(card_info)

                if (
                    double_sided
                    and backside_filename(card.file_name) not in self._skip_files
                ):
                    back_uri = _lookup(card_info, "card_faces", 1, "image_uris", "png")
                    self._backsides.append(_BacksideRequest(back_uri, card))
                    self._total_requests += 1

                if card.file_name in self._skip_files:
                    log.info("Skipping card %s", card.name)
                    self._downloads += 1
                    self._emit_progress(
                        self._downloads + len(self._card_infos), self._total_requests
                    )
                    continue

                log.info("Requesting artwork for card %s", card.name)
                if double_sided:
                    uri = _lookup(card_info, "card_faces", 0, "image_uris", "png")
                else:
                    uri = _lookup(card_info, "image_uris", "png")
                self._request(uri)
                return True

            if self._downloads < cards_in_deck + len(self._backsides):
                request = self._backsides[self._downloads - cards_in_deck]
                log.info("Requesting backside artwork for card %s", request.front.name)
                self._request(request.uri)
                return True

            return False