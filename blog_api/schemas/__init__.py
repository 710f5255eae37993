from .post import PostCreate, PostEntity, PostTagRow, PostUpdate
from .tag import TagCreate, TagEntity

__all__ = [
    "PostCreate",
    "PostEntity",
    "PostTagRow",
    "PostUpdate",
    "TagCreate",
    "TagEntity",
]
