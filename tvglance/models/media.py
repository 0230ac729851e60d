"""Media models for TVMaze show and episode records."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_validator


class _Record(BaseModel):
    """Immutable record; fields the API adds beyond ours are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Image(_Record):
    """Poster image URLs."""

    medium: Optional[str] = None
    original: Optional[str] = None


class Rating(_Record):
    """Aggregate user rating."""

    average: Optional[float] = None


class Show(_Record):
    """A TV series from the TVMaze catalog."""

    id: int
    name: str = ""
    summary: Optional[str] = None  # HTML
    image: Optional[Image] = None
    genres: List[str] = []
    status: str = ""  # e.g., "Running", "Ended"
    rating: Rating = Rating()
    runtime: Optional[int] = None

    @field_validator("name", "status", "genres", "rating", mode="before")
    @classmethod
    def null_to_default(cls, v, info):
        # TVMaze sends null for some of these on sparse records
        if v is None:
            return {"name": "", "status": "", "genres": [], "rating": {}}[info.field_name]
        return v

    @property
    def poster_url(self) -> str:
        return self.image.medium if self.image and self.image.medium else ""


class Episode(_Record):
    """A single episode belonging to one show."""

    id: int
    name: str = ""
    season: int
    number: Optional[int] = None  # None for specials
    summary: Optional[str] = None  # HTML
    image: Optional[Image] = None

    @field_validator("name", mode="before")
    @classmethod
    def null_name(cls, v):
        return "" if v is None else v

    @property
    def poster_url(self) -> str:
        return self.image.medium if self.image and self.image.medium else ""
