from fastapi import APIRouter

from app.schemas.article import PublicationOut
from app.services.publications import PUBLICATIONS

router = APIRouter()


@router.get("", response_model=list[PublicationOut])
async def list_publications():
    """Publications that can be used as chat filters."""
    return [PublicationOut(db_name=p.db_name, display_name=p.display_name) for p in PUBLICATIONS]
