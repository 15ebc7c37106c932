import base64
import xml.etree.ElementTree as ET

import pytest

from proxyprep.downloader import QueuedClient, Reply, run_downloads
from proxyprep.mpcfill import (
    MPCFillDownloader,
    id_from_url,
    parse_mpcfill_card,
)


def _card(name, card_id, slots):
    return f"<card><id>{card_id}</id><slots>{slots}</slots><name>{name}</name></card>"


def _order(fronts, backs="", cardback="cb"):
    backs_xml = f"<backs>{backs}</backs>" if backs else ""
    return (
        f"<order><fronts>{fronts}</fronts>{backs_xml}"
        f"<cardback>{cardback}</cardback></order>"
    )


BASIC = _order(
    _card("a.png", "ida", "0,1,2") + _card("b.png", "idb", "3"),
    backs=_card("bb.png", "idbb", "3"),
)


def _parsed(text=BASIC, skip=()):
    downloader = MPCFillDownloader(skip)
    downloader.parse_input(text)
    return downloader


def test_parse_files_and_amounts():
    downloader = _parsed()
    assert downloader.files() == ["a.png", "b.png"]
    assert downloader.amount("a.png") == 3
    assert downloader.amount("b.png") == 1
    assert downloader.amount("missing.png") == 0


def test_backsides():
    downloader = _parsed()
    assert downloader.backside("b.png") == "bb.png"
    assert downloader.backside("a.png") is None
    assert downloader.backside("missing.png") is None


def test_same_front_different_back_is_renamed():
    text = _order(
        _card("x.png", "idx", "0,1"),
        backs=_card("b1.png", "id1", "0") + _card("b2.png", "id2", "1"),
    )
    downloader = _parsed(text)
    assert downloader.files() == ["x.png", "x - Copy 0.png"]
    assert downloader.duplicates("x.png") == ["x - Copy 0.png"]
    assert downloader.backside("x - Copy 0.png") == "b2.png"
    assert downloader.duplicates("other.png") == []


def test_provides_bleed_edge():
    assert _parsed().provides_bleed_edge() is True


@pytest.mark.parametrize(
    "text",
    [
        "<order><fronts>",
        "<notorder><fronts/><cardback>x</cardback></notorder>",
        "<order><cardback>x</cardback></order>",
        "<order><fronts>" + _card("a.png", "ida", "0") + "</fronts></order>",
    ],
)
def test_invalid_input_raises(text):
    with pytest.raises(ValueError):
        MPCFillDownloader().parse_input(text)


def test_begin_download_requests_each_id_once():
    text = _order(
        _card("a.png", "ida", "0") + _card("b.png", "idb", "1"),
        backs=_card("same.png", "ida", "1"),
    )
    downloader = _parsed(text)
    progress = []
    downloader.on_progress = lambda done, total: progress.append((done, total))
    client = QueuedClient()
    assert downloader.begin_download(client) is True
    ids = [id_from_url(url) for url in client.pending]
    assert ids == ["ida", "idb", "cb"]
    assert progress == [(0, 3)]


def test_begin_download_skips_files():
    downloader = _parsed(skip=["a.png", "__back.png"])
    client = QueuedClient()
    assert downloader.begin_download(client) is True
    assert [id_from_url(url) for url in client.pending] == ["idb", "idbb"]


def test_begin_download_without_cards():
    assert MPCFillDownloader().begin_download(QueuedClient()) is False


def test_handle_reply_decodes_and_names():
    downloader = _parsed()
    client = QueuedClient()
    downloader.begin_download(client)
    images = {}
    downloader.on_image_available = lambda data, name: images.__setitem__(name, data)
    progress = []
    downloader.on_progress = lambda done, total: progress.append((done, total))

    urls = list(client.pending)
    downloader.handle_reply(Reply(urls[2], base64.b64encode(b"back-image")))
    downloader.handle_reply(Reply(urls[3], base64.b64encode(b"card-back")))
    assert images == {"bb.png": b"back-image", "__back.png": b"card-back"}
    assert progress == [(1, 4), (2, 4)]


def test_run_downloads_end_to_end():
    downloader = _parsed()
    images = {}
    downloader.on_image_available = lambda data, name: images.__setitem__(name, data)
    progress = []
    downloader.on_progress = lambda done, total: progress.append((done, total))

    fetched = run_downloads(
        downloader, lambda url: base64.b64encode(id_from_url(url).encode())
    )
    assert len(fetched) == 4
    assert images == {
        "a.png": b"ida",
        "b.png": b"idb",
        "bb.png": b"idbb",
        "__back.png": b"cb",
    }
    assert progress[-1] == (4, 4)


def test_id_from_url():
    assert id_from_url("https://host.example.com/exec?id=abc") == "abc"
    assert id_from_url("no-marker") == "no-marker"


def test_parse_mpcfill_card():
    element = ET.fromstring(_card("c.png", "idc", "4,7"))
    card, slots = parse_mpcfill_card(element)
    assert card.name == "c.png"
    assert card.id == "idc"
    assert card.amount == 2
    assert card.backside is None
    assert slots == [4, 7]


def test_parse_mpcfill_card_missing_fields():
    card, slots = parse_mpcfill_card(ET.fromstring("<card/>"))
    assert (card.name, card.id) == ("", "")
    assert slots == [0]


def test_consolidates_identical_cards():
    text = _order(_card("a.png", "ida", "0,2") + _card("b.png", "idb", "1"))
    downloader = _parsed(text)
    assert downloader.files() == ["a.png", "b.png"]
    assert downloader.amount("a.png") == 2