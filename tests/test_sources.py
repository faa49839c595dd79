import base64
import json

import pytest

from app.errors import EncodingError
from app.services.sources import decode_sources, encode_sources, sources_header


def test_round_trip(make_article):
    articles = [
        make_article("a1", 0.9, title="Première étape", authors=None, tags=None),
        make_article("a2", 0.5, publication_date=1714521600, featured_image="https://img.example/x.png"),
        make_article("a3", None, is_truncated=True),
    ]
    assert decode_sources(encode_sources(articles)) == articles


def test_header_is_base64_json(make_article):
    value = encode_sources([make_article("a1", title="Über AI")])
    payload = json.loads(base64.b64decode(value).decode("utf-8"))
    assert payload[0]["id"] == "a1"
    assert payload[0]["title"] == "Über AI"
    assert payload[0]["score"] == 0.9
    value.encode("ascii")


def test_empty_list_round_trip():
    value = encode_sources([])
    assert base64.b64decode(value) == b"[]"
    assert decode_sources(value) == []


def test_missing_header_decodes_to_empty_list():
    assert decode_sources(None) == []
    assert decode_sources("") == []


def test_garbage_header_is_encoding_error():
    with pytest.raises(EncodingError):
        decode_sources("not base64!!")


def test_unserializable_sources_drop_header():
    assert sources_header([object()]) == {}


def test_sources_header(make_article):
    headers = sources_header([make_article()])
    assert decode_sources(headers["X-Sources"])[0].id == "a1"
