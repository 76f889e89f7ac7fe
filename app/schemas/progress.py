from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ProgressStats(BaseModel):
    # Fractional counts pass through unrounded
    current_level: str
    completed_topics: int | float
    next_level: str | None = None
    topics_to_next_level: int | float = 0

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class LevelInfo(BaseModel):
    level: str
    completed_topics: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LevelThresholdResponse(BaseModel):
    name: str
    min_topics: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True
