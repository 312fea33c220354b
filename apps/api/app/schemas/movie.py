"""Movie API schemas."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class MovieFields(BaseModel):
    """Mutable fields of a movie; PUT replaces all of them at once."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    description: str = ""
    year: StrictInt
    director: str
    producers: list[str]


class Movie(MovieFields):
    id: str


class ServiceInfo(BaseModel):
    version: str
