import os

os.environ["DEEPSEEK_API_KEY"] = ""
os.environ["PINECONE_API_KEY"] = ""
os.environ["PINECONE_HOST"] = ""
os.environ["CORS_ORIGINS"] = ""

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.deps import get_llm_client, get_search_index
from app.main import app


def _chunk(content=None, finish_reason=None, reasoning=None):
    delta = SimpleNamespace(content=content)
    if reasoning is not None:
        delta.reasoning_content = reasoning
    return SimpleNamespace(choices=[SimpleNamespace(delta=delta, finish_reason=finish_reason)])


class FakeStream:
    def __init__(self, chunks, error=None):
        self._chunks = chunks
        self._error = error
        self.closed = False

    def __iter__(self):
        yield from self._chunks
        if self._error is not None:
            raise self._error

    def close(self):
        self.closed = True


class FakeCompletions:
    def __init__(self):
        self.reply = '{"query": "generated query"}'
        self.deltas = ["Hello", " world"]
        self.reasoning = []
        self.stream_error = None
        self.open_error = None
        self.calls = []
        self.streams = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if kwargs.get("stream"):
            if self.open_error is not None:
                raise self.open_error
            chunks = [_chunk(reasoning=r) for r in self.reasoning]
            chunks += [_chunk(content=d) for d in self.deltas]
            chunks.append(_chunk(finish_reason="stop"))
            stream = FakeStream(chunks, error=self.stream_error)
            self.streams.append(stream)
            return stream
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.reply))])

    @property
    def json_calls(self):
        return [c for c in self.calls if not c.get("stream")]

    @property
    def stream_calls(self):
        return [c for c in self.calls if c.get("stream")]


class FakeLLM:
    """Stands in for the OpenAI-compatible client: only chat.completions.create is used."""

    def __init__(self):
        self.completions = FakeCompletions()
        self.chat = SimpleNamespace(completions=self.completions)


class FakeIndex:
    def __init__(self, hits=None, error=None):
        self.hits = hits or []
        self.error = error
        self.calls = []

    def search(self, namespace, query, fields):
        self.calls.append({"namespace": namespace, "query": query, "fields": fields})
        if self.error is not None:
            raise self.error
        return {"result": {"hits": self.hits}}


@pytest.fixture
def make_fields():
    def _make(**overrides):
        fields = {
            "authors": ["Jane Doe"],
            "featured_image": None,
            "is_truncated": False,
            "publication": "mintpress",
            "publication_date": "2024-05-01T00:00:00Z",
            "scrape_timestamp": "2024-05-02T08:30:00Z",
            "tags": ["ai"],
            "text": "Large language models are everywhere.",
            "title": "The LLM boom",
            "url": "https://example.com/llm-boom",
        }
        fields.update(overrides)
        return fields

    return _make


@pytest.fixture
def make_hit(make_fields):
    def _make(hit_id="a1", score=0.9, **overrides):
        return {"_id": hit_id, "_score": score, "fields": make_fields(**overrides)}

    return _make


@pytest.fixture
def make_article(make_hit):
    from app.services.retrieval import hit_to_article

    def _make(hit_id="a1", score=0.9, **overrides):
        return hit_to_article(make_hit(hit_id, score, **overrides))

    return _make


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def fake_index():
    return FakeIndex()


@pytest.fixture
def client(fake_llm, fake_index):
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    app.dependency_overrides[get_search_index] = lambda: fake_index

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
