import datetime as dt

from pydantic import BaseModel, ConfigDict


class Article(BaseModel):
    """One retrieved news article, as stored in the index plus its search hit data."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    authors: list[str] | None = None
    featured_image: str | None = None
    is_truncated: bool = False
    publication: str
    publication_date: dt.datetime | None = None
    scrape_timestamp: dt.datetime | None = None
    tags: list[str] | None = None
    text: str
    title: str
    url: str
    score: float | None = None


class PublicationOut(BaseModel):
    db_name: str
    display_name: str
