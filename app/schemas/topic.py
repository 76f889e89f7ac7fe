from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class TopicProgressUpdate(BaseModel):
    progress: int


class TopicProgressResponse(BaseModel):
    id: int
    name: str
    progress: int
    is_completed: bool

    class Config:
        alias_generator = to_camel
        populate_by_name = True
