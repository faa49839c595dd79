class ChatPipelineError(Exception):
    """Base for failures in the chat pipeline.

    ``kind`` and ``status_code`` are what the HTTP layer reports when the error
    happens before the answer stream has started.
    """

    kind = "chat_pipeline_error"
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class RequestDecodeError(ChatPipelineError):
    kind = "request_decode_error"
    status_code = 400


class BackendUnavailable(ChatPipelineError):
    kind = "backend_unavailable"
    status_code = 503


class QueryGenerationError(ChatPipelineError):
    kind = "query_generation_error"
    status_code = 502


class RetrievalError(ChatPipelineError):
    kind = "retrieval_error"
    status_code = 502


class ContextAssemblyError(ChatPipelineError):
    kind = "context_assembly_error"
    status_code = 500


class AnswerStreamError(ChatPipelineError):
    """Raised once tokens may already be on the wire; ends the stream instead of a response."""

    kind = "answer_stream_error"
    status_code = 502


class EncodingError(ChatPipelineError):
    """The sources list could not be serialized; the answer still streams without it."""

    kind = "encoding_error"
