from collections import deque

import pytest

from proxyprep.downloader import QueuedClient
from proxyprep.inference import (
    CARD_SIZE_HINT,
    UNCROP_HINT,
    InputType,
    infer_source,
    make_downloader,
    validate_settings,
)

MPC_XML = (
    "<order><fronts><card><id>abc</id><slots>0</slots>"
    "<name>Sol Ring.png</name></card></fronts>"
    "<cardback>back</cardback></order>"
)


def test_mpc_autofill_detected():
    assert infer_source(MPC_XML) is InputType.MPC_AUTOFILL


def test_moxfield_decklist_detected():
    text = "1x Sol Ring (CMM) 400\n2x Island (UNF) 235\n"
    assert infer_source(text) is InputType.DECKLIST


def test_archidekt_with_header_detected():
    text = "Commander:\r\n1 Sol Ring (CMM) 400 [Artifact]\r\n"
    assert infer_source(text) is InputType.DECKLIST


def test_garbage_is_none():
    assert infer_source("hello world\n1x Sol Ring (CMM) 400") is InputType.NONE


def test_unterminated_order_is_none():
    assert infer_source("<order><fronts>") is InputType.NONE


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Decklist", InputType.DECKLIST),
        ("MPCAutofill", InputType.MPC_AUTOFILL),
        ("None", InputType.NONE),
        ("something else", InputType.NONE),
    ],
)
def test_from_name(name, expected):
    assert InputType.from_name(name) is expected


def test_valid_settings_have_no_errors():
    assert validate_settings(InputType.DECKLIST, "Standard", True) == []


def test_wrong_card_size_reported():
    assert validate_settings(InputType.MPC_AUTOFILL, "Japanese", False) == [
        CARD_SIZE_HINT
    ]


def test_decklist_requires_uncrop():
    assert validate_settings(InputType.DECKLIST, "Standard", False) == [UNCROP_HINT]


def test_both_errors_in_order():
    errors = validate_settings(InputType.DECKLIST, "Poker", False)
    assert errors == [CARD_SIZE_HINT, UNCROP_HINT]


def test_make_mpc_downloader_provides_bleed():
    assert make_downloader(InputType.MPC_AUTOFILL).provides_bleed_edge() is True


@pytest.mark.parametrize("input_type", [InputType.DECKLIST, InputType.NONE])
def test_make_scryfall_downloader(input_type):
    downloader = make_downloader(input_type)
    assert downloader.provides_bleed_edge() is False
    downloader.parse_input("")
    client = QueuedClient()
    assert downloader.begin_download(client) is True
    assert client.pending == deque(["http://cards.scryfall.io/back.png"])


def test_skip_files_passed_on():
    downloader = make_downloader(InputType.DECKLIST, ["__back.png"])
    downloader.parse_input("")
    client = QueuedClient()
    assert downloader.begin_download(client) is False
    assert len(client.pending) == 0