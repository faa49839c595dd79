import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class DateRange(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: dt.datetime | None = Field(default=None, alias="from")
    to: dt.datetime | None = None


class ChatFilters(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    publications: list[str] = []
    date_range: DateRange | None = Field(default=None, alias="dateRange")

    @field_validator("publications")
    @classmethod
    def _dedupe_publications(cls, v: list[str]) -> list[str]:
        # Keep first-seen order; a checkbox list can post the same value twice
        return list(dict.fromkeys(p for p in v if p))


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(..., min_length=1)
    filters: ChatFilters = Field(default_factory=ChatFilters)
    use_reasoning_model: bool = Field(default=False, alias="useReasoningModel")


class SearchQuery(BaseModel):
    """Shape the query-rewrite model must answer with."""

    model_config = ConfigDict(extra="ignore", strict=True)

    query: str = Field(..., min_length=1)
