import base64
import binascii
import logging

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from app.errors import EncodingError
from app.schemas.article import Article

logger = logging.getLogger(__name__)

_ARTICLE_LIST = TypeAdapter(list[Article])


def encode_sources(articles: list[Article]) -> str:
    """Base64 of the UTF-8 JSON array of articles, safe to send as a header value."""
    try:
        payload = _ARTICLE_LIST.dump_json(articles)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodingError(f"Could not serialize sources: {e}") from e
    return base64.b64encode(payload).decode("ascii")


def decode_sources(value: str | None) -> list[Article]:
    if not value:
        return []
    try:
        payload = base64.b64decode(value, validate=True)
        return _ARTICLE_LIST.validate_json(payload)
    except (binascii.Error, ValidationError) as e:
        raise EncodingError(f"Could not decode sources header: {e}") from e


def sources_header(articles: list[Article]) -> dict[str, str]:
    """Response headers carrying the sources. Empty when they cannot be encoded."""
    try:
        return {"X-Sources": encode_sources(articles)}
    except EncodingError:
        logger.exception("Dropping X-Sources header")
        return {}
