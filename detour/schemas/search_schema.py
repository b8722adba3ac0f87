"""Search schema definitions for translated catalogue searches."""
from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class SearchField(str, Enum):
    """Primo search field a term is scoped to."""
    ANY = "any"
    TITLE = "title"
    CREATOR = "creator"
    SUBJECT = "sub"


class Connective(str, Enum):
    """Boolean operator joining a term to the next one."""
    AND = "AND"
    OR = "OR"
    NOT = "NOT"


class SearchTerm(BaseModel):
    """One term of a Primo advanced search.

    ``connective`` says how this term combines with the following term.
    On the last term of a sequence it is always AND and means nothing.
    """
    model_config = ConfigDict(frozen=True)

    field: SearchField = SearchField.ANY
    operator: Literal["contains"] = "contains"
    text: str
    connective: Connective = Connective.AND

    def to_query(self) -> str:
        """Serialize as a Primo ``query`` parameter value."""
        return f"{self.field.value},{self.operator},{self.text},{self.connective.value}"
