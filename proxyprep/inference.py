"""Work out what kind of card list was pasted and pick a downloader for it."""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

from .decklist import ScryfallDownloader, decklist_regex
from .downloader import CardArtDownloader
from .mpcfill import MPCFillDownloader

_LINE_SPLIT = re.compile(r"[\r\n]")

STANDARD_CARD_SIZE = "Standard"
CARD_SIZE_HINT = 'Be sure to card size to "Standard" when downloading MtG cards!'
UNCROP_HINT = (
    'Be sure to set the "Allow Precropped" option when downloading from Scryfall!'
)


class InputType(Enum):
    """The kinds of input the card downloader understands."""

    DECKLIST = "Decklist"
    MPC_AUTOFILL = "MPCAutofill"
    NONE = "None"

    @classmethod
    def from_name(cls, name: str) -> InputType:
        """Look up a type by its display name, falling back to ``NONE``."""
        for member in cls:
            if member.value == name:
                return member
        return cls.NONE


def infer_source(text: str) -> InputType:
    """Guess the input type from the text alone."""
    if text.startswith("<order>") and text.endswith("</order>"):
        return InputType.MPC_AUTOFILL

    pattern = decklist_regex()
    lines = filter(None, _LINE_SPLIT.split(text))
    # Lines ending in a colon are section headers such as "Commander:".
    if all(
        line.endswith(":") or pattern.search(line) is not None for line in lines
    ):
        return InputType.DECKLIST

    return InputType.NONE


def validate_settings(
    input_type: InputType, card_size_choice: str, enable_uncrop: bool
) -> list[str]:
    """Return the problems with the current settings; empty when all is well."""
    errors: list[str] = []
    if card_size_choice != STANDARD_CARD_SIZE:
        errors.append(CARD_SIZE_HINT)
    if input_type is InputType.DECKLIST and not enable_uncrop:
        errors.append(UNCROP_HINT)
    return errors


def make_downloader(
    input_type: InputType, skip_files: Iterable[str] = ()
) -> CardArtDownloader:
    """Create the downloader for ``input_type``; decklists are the fallback."""
    if input_type is InputType.MPC_AUTOFILL:
        return MPCFillDownloader(skip_files)
    return ScryfallDownloader(skip_files)