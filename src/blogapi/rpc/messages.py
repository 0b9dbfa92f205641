"""
blogapi.rpc.messages

Request/response messages for the blog RPCs.

Responsibilities:
- Describe each RPC's payload as a pydantic model (camelCase on the wire).
- Convert between the wire `Blog` message and the domain `Blog` record.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from blogapi.domain import models


class Message(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Blog(Message):
    id: str = ""
    author_id: str = ""
    title: str = ""
    content: str = ""

    @classmethod
    def from_domain(cls, blog: models.Blog) -> Blog:
        return cls(id=blog.id, author_id=blog.author_id, title=blog.title, content=blog.content)

    def to_domain(self) -> models.Blog:
        return models.Blog(
            id=self.id, author_id=self.author_id, title=self.title, content=self.content
        )


class CreateBlogRequest(Message):
    # The id, if any, is ignored; storage assigns a fresh one.
    blog: Blog = Field(default_factory=Blog)


class CreateBlogResponse(Message):
    blog: Blog


class ReadBlogRequest(Message):
    id: str = ""


class ReadBlogResponse(Message):
    blog: Blog | None = None
    status: models.ReadOutcome = models.ReadOutcome.UNKNOWN


class UpdateBlogRequest(Message):
    blog: Blog = Field(default_factory=Blog)


class UpdateBlogResponse(Message):
    status: models.UpdateOutcome = models.UpdateOutcome.UNKNOWN


class DeleteBlogRequest(Message):
    id: str = ""


class DeleteBlogResponse(Message):
    status: models.DeleteOutcome = models.DeleteOutcome.UNKNOWN


class ListBlogsRequest(Message):
    pass


class ListBlogsResponse(Message):
    blog: Blog
