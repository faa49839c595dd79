import logging
from dataclasses import dataclass

from app.config import Settings
from app.schemas.article import Article
from app.schemas.chat import ChatRequest
from app.services.context import augment_messages, build_grounding_prompt
from app.services.contextualizer import build_search_query
from app.services.filters import compile_filter, to_index_filter
from app.services.retrieval import search_articles

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedChat:
    """Everything needed to stream an answer, computed before the first byte is sent."""

    query: str
    search_filter: dict
    sources: list[Article]
    model: str
    messages: list[dict]


def select_model(settings: Settings, use_reasoning_model: bool = False) -> str:
    return settings.REASONING_MODEL if use_reasoning_model else settings.CHAT_MODEL


def prepare_chat(request: ChatRequest, llm, index, settings: Settings) -> PreparedChat:
    """Contextualize, filter, retrieve and ground one chat turn.

    Raises a ChatPipelineError subclass on any failure; nothing has been
    streamed yet at that point.
    """
    query = build_search_query(request.messages, llm, model=settings.QUERY_MODEL)

    date_range = request.filters.date_range
    expr = compile_filter(
        request.filters.publications,
        date_range.from_ if date_range else None,
        date_range.to if date_range else None,
    )
    search_filter = to_index_filter(expr)

    sources = search_articles(
        index,
        query,
        search_filter,
        namespace=settings.PINECONE_NAMESPACE,
        top_k=settings.SEARCH_TOP_K,
    )

    question = request.messages[-1].content
    prompt = build_grounding_prompt(sources, question, settings.CONTEXT_CHAR_LIMIT)

    model = select_model(settings, request.use_reasoning_model)
    logger.info("Prepared chat: query=%r sources=%d model=%s", query, len(sources), model)
    return PreparedChat(
        query=query,
        search_filter=search_filter,
        sources=sources,
        model=model,
        messages=augment_messages(request.messages, prompt),
    )
