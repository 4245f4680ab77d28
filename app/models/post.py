from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Author(BaseModel):
    name: str = ""
    email: str = ""

    @field_validator("name", "email", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value


class FrontMatter(BaseModel):
    """Metadata block found at the top of a post's markdown file.

    Keys given without a value (``title:`` in YAML) keep their empty default.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    slug: Optional[str] = None  # informational; overrides the path slug when set
    author: Author = Field(default_factory=Author)

    @field_validator("title", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("author", mode="before")
    @classmethod
    def _none_as_anonymous(cls, value):
        return Author() if value is None else value


class Post(BaseModel):
    """One rendered blog post. Built per request and never persisted."""

    slug: str
    title: str = ""
    author: Author = Field(default_factory=Author)
    content: str = ""  # HTML fragment produced by the markdown renderer
