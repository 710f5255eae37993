"""
Repository contracts consumed by the HTTP layer.

Two implementations exist for each contract: the SQLAlchemy-backed one used
in production and the in-memory one used for fast tests. Their success paths
behave the same. The one known divergence is TagRepository.create with a name
that already exists: the SQLAlchemy store raises DuplicateError while the
in-memory store returns the existing tag.
"""

from abc import ABC, abstractmethod

from blog_api.schemas.post import PostCreate, PostEntity, PostUpdate
from blog_api.schemas.tag import TagEntity


class PostRepository(ABC):
    @abstractmethod
    async def create(self, payload: PostCreate) -> PostEntity:
        """Store a post with its tag associations and return it fully hydrated."""

    @abstractmethod
    async def find(self, post_id: int) -> PostEntity:
        """Return one post or raise PostNotFoundError."""

    @abstractmethod
    async def all(self) -> list[PostEntity]:
        """Return every post, most recent first."""

    @abstractmethod
    async def update(self, post_id: int, payload: PostUpdate) -> PostEntity:
        """
        Apply a partial update. Omitted fields keep their value; a tags list
        (even an empty one) replaces the whole association set.
        """

    @abstractmethod
    async def delete(self, post_id: int) -> None:
        """Remove a post and all of its tag associations."""


class TagRepository(ABC):
    @abstractmethod
    async def create(self, name: str) -> TagEntity:
        ...

    @abstractmethod
    async def all(self) -> list[TagEntity]:
        """Return every tag ordered by ascending id."""

    @abstractmethod
    async def delete(self, tag_id: int) -> None:
        """Remove a tag and detach it from every post."""
