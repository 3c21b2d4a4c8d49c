from pydantic import BaseModel, Field
from typing import List, Optional
import datetime as dt


class ReadingProgress(BaseModel):
    book: str
    chapter: int = Field(ge=1)


class ReadingProgressResponse(BaseModel):
    user_id: str
    book: str
    chapter: int
    last_read_at: Optional[dt.datetime] = None


class SaveProgressResponse(BaseModel):
    saved: bool
    progress: Optional[ReadingProgressResponse] = None


class Verse(BaseModel):
    book_name: Optional[str] = None
    chapter: int
    verse: int
    text: str


class PassageResponse(BaseModel):
    reference: str
    text: str
    translation_name: Optional[str] = None
    verses: List[Verse] = []
