import logging
import re

from pydantic import ValidationError

from app.clients.deepseek import complete_json
from app.errors import QueryGenerationError
from app.schemas.chat import ChatMessage, SearchQuery

logger = logging.getLogger(__name__)

CONTEXTUAL_QUERY_SYSTEM_PROMPT = """You will be provided with a conversation history. Your task is to generate a search query based on this history. You must output the query in a JSON format, with a single key "query".

EXAMPLE CONVERSATION:
user: I want to know about the latest developments in AI.
assistant: Sure, there have been many recent breakthroughs. Are you interested in large language models, computer vision, or something else?
user: Tell me about large language models.

EXAMPLE JSON OUTPUT:
{
    "query": "latest developments in large language models AI"
}"""

CONTEXTUAL_QUERY_USER_PROMPT = "Conversation history:\n---\n{conversation}\n---"

_FENCE_RE = re.compile(r"```(?:json)?[ \t]*\n(.*?)\n?```", re.DOTALL)


def render_conversation(messages: list[ChatMessage]) -> str:
    return "\n".join(f"{m.role}: {m.content}" for m in messages)


def extract_json_block(text: str) -> str:
    """Return the contents of a fenced code block if there is one, else the text itself."""
    match = _FENCE_RE.search(text)
    return match.group(1) if match else text.strip()


def parse_search_query(text: str) -> str:
    try:
        parsed = SearchQuery.model_validate_json(extract_json_block(text))
    except ValidationError as e:
        raise QueryGenerationError(f"Unusable search query from model: {text[:200]!r}") from e
    return parsed.query


def build_search_query(messages: list[ChatMessage], client=None, model: str = "deepseek-chat") -> str:
    """Collapse the conversation into one self-contained search query.

    A single message is searched verbatim without calling the model.
    """
    if len(messages) == 1:
        return messages[0].content

    if client is None:
        raise QueryGenerationError("No language model configured for query generation")

    prompt = CONTEXTUAL_QUERY_USER_PROMPT.format(conversation=render_conversation(messages))
    try:
        text = complete_json(client, CONTEXTUAL_QUERY_SYSTEM_PROMPT, prompt, model=model)
    except Exception as e:
        logger.exception("Query generation call failed")
        raise QueryGenerationError(f"Query generation call failed: {e}") from e

    query = parse_search_query(text)
    logger.info("Contextual query: %s", query)
    return query
