from dataclasses import dataclass


@dataclass(frozen=True)
class Publication:
    db_name: str
    display_name: str


PUBLICATIONS = (
    Publication("mintpress", "MintPress"),
    Publication("thegrayzone", "The Grayzone"),
    Publication("consortiumnews", "Consortium News"),
    Publication("thecradle", "The Cradle"),
)

_DISPLAY_NAMES = {p.db_name: p.display_name for p in PUBLICATIONS}


def display_name(db_name: str) -> str:
    """Human-readable name for a publication id; unknown ids come back unchanged."""
    return _DISPLAY_NAMES.get(db_name, db_name)
