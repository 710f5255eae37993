"""
Repositories map between the posts/tags tables and the PostEntity/TagEntity
domain model. Each contract in base.py has a SQLAlchemy implementation and an
in-memory one; the app factory picks a pair at wiring time.
"""

from .base import PostRepository, TagRepository
from .fold import fold_rows
from .memory import InMemoryPostRepository, InMemoryStore, InMemoryTagRepository
from .post_repository import SQLAlchemyPostRepository
from .tag_repository import SQLAlchemyTagRepository

__all__ = [
    "PostRepository",
    "TagRepository",
    "fold_rows",
    "InMemoryPostRepository",
    "InMemoryStore",
    "InMemoryTagRepository",
    "SQLAlchemyPostRepository",
    "SQLAlchemyTagRepository",
]
