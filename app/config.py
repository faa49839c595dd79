from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    DEEPSEEK_API_KEY: str = ""
    DEEPSEEK_BASE_URL: str = "https://api.deepseek.com/v1"

    # Answer models (closed set, picked per request) and the query-rewrite model
    CHAT_MODEL: str = "deepseek-chat"
    REASONING_MODEL: str = "deepseek-reasoner"
    QUERY_MODEL: str = "deepseek-chat"

    PINECONE_API_KEY: str = ""
    PINECONE_INDEX: str = ""
    PINECONE_HOST: str = ""
    PINECONE_NAMESPACE: str = "articles"

    SEARCH_TOP_K: int = 15
    CONTEXT_CHAR_LIMIT: int = 500

    # Wall-clock budget for one chat request, streaming included
    REQUEST_TIMEOUT_SECONDS: float = 60.0

    # Comma-separated origins allowed to call the API from a browser
    CORS_ORIGINS: str = ""

    LOG_LEVEL: str = "INFO"
    APP_TITLE: str = "News Chat"
    DEBUG: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
