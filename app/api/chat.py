import time

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from app.config import Settings, get_settings
from app.deps import get_llm_client, get_search_index
from app.schemas.chat import ChatRequest
from app.services.chat import prepare_chat
from app.services.sources import sources_header
from app.services.streaming import (
    DATA_STREAM_HEADERS,
    DATA_STREAM_MEDIA_TYPE,
    iter_answer,
    open_answer_stream,
)

router = APIRouter()


@router.post("")
def chat(
    data: ChatRequest,
    llm=Depends(get_llm_client),
    index=Depends(get_search_index),
    settings: Settings = Depends(get_settings),
):
    """Answer the last message from retrieved articles, streaming the reply.

    The retrieved articles travel in the ``X-Sources`` header (base64 JSON).
    """
    deadline = time.monotonic() + settings.REQUEST_TIMEOUT_SECONDS

    prepared = prepare_chat(data, llm, index, settings)
    stream = open_answer_stream(llm, prepared.messages, prepared.model)

    return StreamingResponse(
        iter_answer(stream, deadline=deadline),
        media_type=DATA_STREAM_MEDIA_TYPE,
        headers={**DATA_STREAM_HEADERS, **sources_header(prepared.sources)},
    )
