from functools import lru_cache

from app.clients.deepseek import get_deepseek_client
from app.clients.pinecone_index import get_article_index
from app.errors import BackendUnavailable


@lru_cache
def _shared_llm_client():
    return get_deepseek_client()


@lru_cache
def _shared_article_index():
    return get_article_index()


def get_llm_client():
    client = _shared_llm_client()
    if client is None:
        raise BackendUnavailable("DEEPSEEK_API_KEY not configured. Set it in .env to enable chat.")
    return client


def get_search_index():
    index = _shared_article_index()
    if index is None:
        raise BackendUnavailable("Pinecone not configured. Set PINECONE_API_KEY and PINECONE_HOST in .env.")
    return index
