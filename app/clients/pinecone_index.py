import logging

from pinecone import Pinecone

from app.config import get_settings

logger = logging.getLogger(__name__)


def get_article_index():
    """Handle to the articles index, or None when Pinecone is not configured."""
    settings = get_settings()
    if not settings.PINECONE_API_KEY or not settings.PINECONE_HOST:
        logger.warning("PINECONE_API_KEY/PINECONE_HOST not set: retrieval disabled")
        return None
    pc = Pinecone(api_key=settings.PINECONE_API_KEY)
    return pc.Index(name=settings.PINECONE_INDEX, host=settings.PINECONE_HOST)


def search_records(
    index,
    namespace: str,
    text: str,
    top_k: int,
    search_filter: dict | None = None,
) -> list[dict]:
    """Text search against an index with integrated embedding.

    Returns the raw hits as dicts (``_id``, ``_score``, ``fields``) in index order.
    """
    query = {"inputs": {"text": text}, "top_k": top_k}
    if search_filter:
        query["filter"] = search_filter

    response = index.search(namespace=namespace, query=query, fields=["*"])
    if hasattr(response, "to_dict"):
        response = response.to_dict()

    result = (response or {}).get("result") or {}
    return list(result.get("hits") or [])
