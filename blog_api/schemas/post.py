from pydantic import BaseModel, Field
from typing import List, Optional

from blog_api.constants import TITLE_MAX_LENGTH, TITLE_MIN_LENGTH
from blog_api.schemas.tag import TagEntity


class PostCreate(BaseModel):
    title: str = Field(..., min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH, title="Post Title", description="The title of the post.")
    body: str = Field(..., title="Post Body", description="The main body of the post.")
    tags: List[int] = Field(default_factory=list, title="Tag IDs", description="IDs of the tags attached to the post.")


class PostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=TITLE_MIN_LENGTH, max_length=TITLE_MAX_LENGTH, title="Updated Title", description="The updated title of the post.")
    body: Optional[str] = Field(None, title="Updated Body", description="The updated body of the post.")
    tags: Optional[List[int]] = Field(
        None,
        title="Tag IDs",
        description="Replaces every tag of the post when given, an empty list clears them. Omit to keep the current tags.",
    )

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Updated Post Title",
                "body": "Updated post body text.",
                "tags": [1, 2],
            }
        }


class PostEntity(BaseModel):
    id: int = Field(..., title="Post ID", description="The unique identifier for the post.")
    title: str = Field(..., title="Post Title", description="The title of the post.")
    body: str = Field(..., title="Post Body", description="The body of the post.")
    tags: List[TagEntity] = Field(default_factory=list, title="Tags", description="Tags attached to the post, in association order.")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "title": "Example Post Title",
                "body": "This is the body of the example post.",
                "tags": [{"id": 1, "name": "python"}],
            }
        }


class PostTagRow(BaseModel):
    """One row of the posts/tags outer join: a post paired with at most one of its tags."""

    post_id: int
    title: str
    body: str
    tag_id: Optional[int] = None
    tag_name: Optional[str] = None
