from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class FavoriteBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    book: str = Field(..., min_length=1, max_length=100)
    chapter: PositiveInt
    verse_number: PositiveInt
    verse_text: str = Field(..., min_length=1)


class FavoriteCreate(FavoriteBase):
    pass


class FavoriteUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    book: Optional[str] = Field(None, min_length=1, max_length=100)
    chapter: Optional[PositiveInt] = None
    verse_number: Optional[PositiveInt] = None
    verse_text: Optional[str] = Field(None, min_length=1)


class FavoriteRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    user_id: str
    book: str
    chapter: int
    verse_number: int
    verse_text: str
    created_at: datetime
