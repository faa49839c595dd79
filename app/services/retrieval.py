import logging

from pydantic import ValidationError

from app.clients.pinecone_index import search_records
from app.errors import RetrievalError
from app.schemas.article import Article

logger = logging.getLogger(__name__)

TOP_K = 15


def hit_to_article(hit: dict) -> Article | None:
    """Merge a hit's stored fields with its id and similarity score.

    Hits without a stored record are skipped (None).
    """
    fields = hit.get("fields") if hit else None
    if not fields:
        return None
    record = {**fields, "id": hit.get("_id"), "score": hit.get("_score")}
    return Article.model_validate(record)


def search_articles(
    index,
    query: str,
    search_filter: dict,
    namespace: str = "articles",
    top_k: int = TOP_K,
) -> list[Article]:
    """Top-K article search. Order is the index's relevance order."""
    try:
        hits = search_records(index, namespace, query, top_k, search_filter)
    except Exception as e:
        logger.exception("Article search failed")
        raise RetrievalError(f"Search backend error: {e}") from e

    articles = []
    for hit in hits:
        try:
            article = hit_to_article(hit)
        except ValidationError as e:
            raise RetrievalError(f"Malformed record {hit.get('_id')!r} from search backend") from e
        if article is not None:
            articles.append(article)

    logger.info("Retrieved %d articles (filter=%s)", len(articles), search_filter)
    return articles
