"""Download card art described by an MPC Autofill order file."""

from __future__ import annotations

import base64
import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from .downloader import CardArtDownloader, QueuedClient, Reply

log = logging.getLogger(__name__)

DOWNLOAD_SCRIPT = (
    "https://script.google.com/macros/s/"
    "AKfycbw8laScKBfxda2Wb0g63gkYDBdy8NWNxINoC4xDOwnCQ3JMFdruam1MdmNmN4wI5k4/exec"
)
DEFAULT_BACK_NAME = "__back.png"

_EXTENSION_RE = re.compile(r"(\.\w+)")
_NON_BASE64_RE = re.compile(rb"[^A-Za-z0-9+/]")


@dataclass
class MPCFillBackside:
    """The individual back of a card."""

    name: str = ""
    id: str = ""


@dataclass
class MPCFillCard:
    """A front side together with the number of copies wanted."""

    name: str = ""
    id: str = ""
    amount: int = 0
    backside: MPCFillBackside | None = None


@dataclass
class _MPCFillSet:
    frontsides: list[MPCFillCard] = field(default_factory=list)
    backside_id: str = ""


def id_from_url(url: str) -> str:
    """The image id that a download URL asks for."""
    return url.split("id=")[-1]


def _element_text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    return "".join(child.itertext()) if child is not None else ""


def _to_uint(text: str) -> int:
    text = text.strip()
    return int(text) if text.isdigit() else 0


def parse_mpcfill_card(element: ET.Element) -> tuple[MPCFillCard, list[int]]:
    """Read one card element; return the card and the slots it fills."""
    name = _element_text(element, "name")
    card_id = _element_text(element, "id")
    slots = [_to_uint(slot) for slot in _element_text(element, "slots").split(",")]
    card = MPCFillCard(name=name, id=card_id, amount=len(slots))
    return card, slots


def _decode_base64(data: bytes) -> bytes:
    cleaned = _NON_BASE64_RE.sub(b"", data)
    remainder = len(cleaned) % 4
    if remainder == 1:
        cleaned = cleaned[:-1]
    elif remainder:
        cleaned += b"=" * (4 - remainder)
    return base64.b64decode(cleaned)


def _same_backside(lhs: MPCFillBackside | None, rhs: MPCFillBackside | None) -> bool:
    if lhs is None or rhs is None:
        return lhs is None and rhs is None
    return lhs.id == rhs.id


def _child_elements(element: ET.Element) -> list[ET.Element]:
    return [child for child in element if isinstance(child.tag, str)]


class MPCFillDownloader(CardArtDownloader):
    """Fetches all images of an MPC Autofill order at once."""

    def __init__(
        self, skip_files: Iterable[str] = (), download_script: str = DOWNLOAD_SCRIPT
    ) -> None:
        super().__init__()
        self._skip_files = list(skip_files)
        self._download_script = download_script
        self._set = _MPCFillSet()
        self._duplicates: dict[str, list[str]] = {}
        self._total_requests = 0
        self._requests: list[str] = []

    def parse_input(self, text: str) -> None:
        try:
            order = ET.fromstring(text)
        except ET.ParseError as exc:
            line, column = exc.position
            raise ValueError(
                f"Parse error at line {line}, column {column}:\n{exc}"
            ) from exc

        if order.tag != "order":
            raise ValueError("No order is defined in MPCFill xml")

        fronts = order.find("fronts")
        if fronts is None:
            raise ValueError("No fronts are defined in MPCFill xml")

        slotted: list[MPCFillCard] = []
        for card_xml in _child_elements(fronts):
            card, slots = parse_mpcfill_card(card_xml)
            for slot in slots:
                while len(slotted) < slot + 1:
                    slotted.append(MPCFillCard())
                slotted[slot] = replace(card, amount=1)

        backs = order.find("backs")
        if backs is not None:
            for card_xml in _child_elements(backs):
                back, slots = parse_mpcfill_card(card_xml)
                for slot in slots:
                    if slot < len(slotted):
                        slotted[slot].backside = MPCFillBackside(back.name, back.id)

        new_set = _MPCFillSet()
        for card in slotted:
            existing = next(
                (
                    other
                    for other in new_set.frontsides
                    if other.id == card.id
                    and _same_backside(other.backside, card.backside)
                ),
                None,
            )
            if existing is None:
                new_set.frontsides.append(card)
            else:
                existing.amount += 1

        cardback = order.find("cardback")
        if cardback is None:
            raise ValueError("No cardback is defined in MPCFill xml")
        new_set.backside_id = "".join(cardback.itertext())

        self._set = new_set

        # Cards sharing a front but not a back need distinct file names.
        for card in self._set.frontsides:
            same_name = [other for other in self._set.frontsides if other.name == card.name]
            renamed: list[str] = []
            for i, dupe in enumerate(same_name[1:]):
                dupe.name = _EXTENSION_RE.sub(
                    lambda m, i=i: f" - Copy {i}{m.group(1)}", dupe.name
                )
                renamed.append(dupe.name)
            if renamed:
                self._duplicates[card.name] = renamed

    def begin_download(self, client: QueuedClient) -> bool:
        if not self._set.frontsides:
            return False

        requested_ids: list[str] = []

        def download(name: str, image_id: str) -> None:
            if image_id in requested_ids:
                return
            requested_ids.append(image_id)
            if name in self._skip_files:
                log.info("Skipping download of card %s", name)
                return
            log.info("Requesting card %s", name)
            url = f"{self._download_script}?id={image_id}"
            client.get(url)
            self._requests.append(url)

        for card in self._set.frontsides:
            download(card.name, card.id)
            if card.backside is not None:
                download(card.backside.name, card.backside.id)
        download(DEFAULT_BACK_NAME, self._set.backside_id)

        self._total_requests = len(self._requests)
        self._emit_progress(0, self._total_requests)
        return True

    def handle_reply(self, reply: Reply) -> None:
        image_id = id_from_url(reply.url)
        file_name = DEFAULT_BACK_NAME
        for card in self._set.frontsides:
            if card.id == image_id:
                file_name = card.name
                break
            if card.backside is not None and card.backside.id == image_id:
                file_name = card.backside.name
                break

        self._emit_image(_decode_base64(reply.data), file_name)

        self._requests = [url for url in self._requests if url != reply.url]
        self._emit_progress(
            self._total_requests - len(self._requests), self._total_requests
        )

    def files(self) -> list[str]:
        return [card.name for card in self._set.frontsides]

    def _find(self, file_name: str) -> MPCFillCard | None:
        return next(
            (card for card in self._set.frontsides if card.name == file_name), None
        )

    def amount(self, file_name: str) -> int:
        card = self._find(file_name)
        return card.amount if card is not None else 0

    def backside(self, file_name: str) -> str | None:
        card = self._find(file_name)
        if card is not None and card.backside is not None:
            return card.backside.name
        return None

    def duplicates(self, file_name: str) -> list[str]:
        return list(self._duplicates.get(file_name, []))

    def provides_bleed_edge(self) -> bool:
        return True