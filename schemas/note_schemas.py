from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class NoteCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    book: str = Field(..., min_length=1, max_length=100)
    chapter: PositiveInt
    verse: PositiveInt
    # Serialized rich-text document, kept verbatim
    content: str = Field(..., min_length=1)


class NoteUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    book: Optional[str] = Field(None, min_length=1, max_length=100)
    chapter: Optional[PositiveInt] = None
    verse: Optional[PositiveInt] = None
    content: Optional[str] = Field(None, min_length=1)


class NoteRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    user_id: str
    book: str
    chapter: int
    verse: int
    content: str
    created_at: datetime
    updated_at: datetime
