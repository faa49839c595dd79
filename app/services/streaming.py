"""Answer streaming in the data-stream line format the chat front end reads.

Each line is ``<type>:<json>\\n``: ``0`` text delta, ``g`` reasoning delta,
``3`` error message, ``d`` finish metadata.
"""
import json
import logging
import time
from collections.abc import Iterator

from app.clients.deepseek import stream_chat
from app.errors import AnswerStreamError

logger = logging.getLogger(__name__)

DATA_STREAM_HEADERS = {"X-Vercel-AI-Data-Stream": "v1"}
DATA_STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"


def text_part(delta: str) -> str:
    return f"0:{json.dumps(delta)}\n"


def reasoning_part(delta: str) -> str:
    return f"g:{json.dumps(delta)}\n"


def error_part(message: str) -> str:
    return f"3:{json.dumps(message)}\n"


def finish_part(reason: str) -> str:
    return f"d:{json.dumps({'finishReason': reason})}\n"


def open_answer_stream(client, messages: list[dict], model: str):
    """Start the completion before any response bytes go out, so failures here are still HTTP errors."""
    try:
        return stream_chat(client, messages, model=model)
    except Exception as e:
        logger.exception("Could not start answer stream (model=%s)", model)
        raise AnswerStreamError(f"Language model unavailable: {e}") from e


def iter_answer(stream, deadline: float | None = None) -> Iterator[str]:
    """Forward model deltas as they arrive.

    A backend failure or an expired deadline ends the stream with an error
    part; whatever was already yielded stays sent. Closing the generator (client
    disconnect) closes the upstream stream.
    """
    finish_reason = "stop"
    try:
        for chunk in stream:
            if deadline is not None and time.monotonic() > deadline:
                raise AnswerStreamError("Answer exceeded the request time budget")
            if not chunk.choices:
                continue
            choice = chunk.choices[0]
            reasoning = getattr(choice.delta, "reasoning_content", None)
            if reasoning:
                yield reasoning_part(reasoning)
            if choice.delta.content:
                yield text_part(choice.delta.content)
            if choice.finish_reason:
                finish_reason = choice.finish_reason
    except AnswerStreamError as e:
        logger.warning("Answer stream stopped: %s", e.detail)
        yield error_part(e.detail)
        finish_reason = "error"
    except Exception as e:
        err = AnswerStreamError(f"Answer stream failed: {e}")
        logger.exception("Answer stream failed mid-response")
        yield error_part(err.detail)
        finish_reason = "error"
    finally:
        close = getattr(stream, "close", None)
        if close is not None:
            close()

    yield finish_part(finish_reason)
