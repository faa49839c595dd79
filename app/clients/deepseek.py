import logging

from openai import OpenAI

from app.config import get_settings

logger = logging.getLogger(__name__)


def get_deepseek_client() -> OpenAI | None:
    settings = get_settings()
    if not settings.DEEPSEEK_API_KEY:
        logger.warning("DEEPSEEK_API_KEY not set: chat answers disabled")
        return None
    return OpenAI(
        api_key=settings.DEEPSEEK_API_KEY,
        base_url=settings.DEEPSEEK_BASE_URL,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        max_retries=0,
    )


def complete_json(
    client: OpenAI,
    system_prompt: str,
    user_prompt: str,
    model: str = "deepseek-chat",
) -> str:
    """Single deterministic completion asking for a JSON object.

    Returns the raw message text; parsing is up to the caller. API errors propagate.
    """
    response = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        temperature=0.0,
        response_format={"type": "json_object"},
    )
    return response.choices[0].message.content or ""


def stream_chat(client: OpenAI, messages: list[dict], model: str = "deepseek-chat"):
    """Open a streaming chat completion. The caller iterates and closes the stream."""
    return client.chat.completions.create(
        model=model,
        messages=messages,
        stream=True,
    )
