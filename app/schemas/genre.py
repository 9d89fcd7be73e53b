from typing import Optional
from pydantic import BaseModel, ConfigDict


class GenreCreate(BaseModel):
    name: Optional[str] = None


class Genre(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)
