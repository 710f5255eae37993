"""
In-memory repositories

A single InMemoryStore owns the post, tag and association tables for one
process wiring. InMemoryPostRepository and InMemoryTagRepository share it, so
deleting a tag detaches it from posts exactly like the relational cascade.
Readers share the store's lock; writers hold it exclusively for the whole
mutation and validate everything before touching the tables, so a failed call
leaves nothing behind.

Behavioural difference from the SQLAlchemy store: creating a tag whose name
already exists returns the existing tag instead of raising DuplicateError.
"""

import itertools
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from blog_api.constants import TITLE_MAX_LENGTH, TITLE_MIN_LENGTH
from blog_api.exceptions import PostNotFoundError, TagNotFoundError, UnexpectedError
from blog_api.repositories.base import PostRepository, TagRepository
from blog_api.repositories.fold import fold_rows
from blog_api.schemas.post import PostCreate, PostEntity, PostTagRow, PostUpdate
from blog_api.schemas.tag import TagEntity
from blog_api.utils.locks import ReadWriteLock

logger = logging.getLogger(__name__)


@dataclass
class StoredPost:
    title: str
    body: str
    tag_ids: list[int] = field(default_factory=list)


class InMemoryStore:
    """Tables and id sequences shared by the in-memory repositories."""

    def __init__(self):
        self.lock = ReadWriteLock()
        self.posts: dict[int, StoredPost] = {}
        self.tags: dict[int, TagEntity] = {}
        self._post_ids = itertools.count(1)
        self._tag_ids = itertools.count(1)

    def next_post_id(self) -> int:
        return next(self._post_ids)

    def next_tag_id(self) -> int:
        return next(self._tag_ids)

    def post_tag_rows(self, post_ids: Iterable[int]) -> Iterator[PostTagRow]:
        """Yield the rows a posts/tags outer join would return for these posts."""
        for post_id in post_ids:
            post = self.posts[post_id]
            if not post.tag_ids:
                yield PostTagRow(post_id=post_id, title=post.title, body=post.body)
                continue
            for tag_id in post.tag_ids:
                yield PostTagRow(
                    post_id=post_id,
                    title=post.title,
                    body=post.body,
                    tag_id=tag_id,
                    tag_name=self.tags[tag_id].name,
                )

    def hydrate(self, post_id: int) -> PostEntity:
        return fold_rows(self.post_tag_rows([post_id]))[0]

    def require_tags(self, tag_ids: list[int]) -> None:
        for tag_id in tag_ids:
            if tag_id not in self.tags:
                raise TagNotFoundError(tag_id)


def _title_fits(title: str) -> bool:
    return TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH


class InMemoryPostRepository(PostRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def create(self, payload: PostCreate) -> PostEntity:
        async with self._store.lock.write():
            if not _title_fits(payload.title):
                raise PostNotFoundError()
            self._store.require_tags(payload.tags)

            post_id = self._store.next_post_id()
            self._store.posts[post_id] = StoredPost(
                title=payload.title,
                body=payload.body,
                tag_ids=list(payload.tags),
            )
            logger.info(f"Post created successfully: {post_id}")
            return self._store.hydrate(post_id)

    async def find(self, post_id: int) -> PostEntity:
        async with self._store.lock.read():
            if post_id not in self._store.posts:
                raise PostNotFoundError(post_id)
            return self._store.hydrate(post_id)

    async def all(self) -> list[PostEntity]:
        async with self._store.lock.read():
            post_ids = sorted(self._store.posts, reverse=True)
            return fold_rows(self._store.post_tag_rows(post_ids))

    async def update(self, post_id: int, payload: PostUpdate) -> PostEntity:
        async with self._store.lock.write():
            existing = self._store.posts.get(post_id)
            if existing is None:
                raise PostNotFoundError(post_id)

            title = payload.title if payload.title is not None else existing.title
            if not _title_fits(title):
                raise UnexpectedError(f"title must be {TITLE_MIN_LENGTH}..{TITLE_MAX_LENGTH} characters", operation="update_post")

            if payload.tags is not None:
                self._store.require_tags(payload.tags)
                tag_ids = list(payload.tags)
            else:
                tag_ids = existing.tag_ids

            self._store.posts[post_id] = StoredPost(
                title=title,
                body=payload.body if payload.body is not None else existing.body,
                tag_ids=tag_ids,
            )
            logger.info(f"Post {post_id} updated")
            return self._store.hydrate(post_id)

    async def delete(self, post_id: int) -> None:
        async with self._store.lock.write():
            if self._store.posts.pop(post_id, None) is None:
                raise PostNotFoundError(post_id)
        logger.info(f"Post {post_id} deleted")


class InMemoryTagRepository(TagRepository):
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def create(self, name: str) -> TagEntity:
        async with self._store.lock.write():
            for tag in self._store.tags.values():
                if tag.name == name:
                    return tag.model_copy()

            tag = TagEntity(id=self._store.next_tag_id(), name=name)
            self._store.tags[tag.id] = tag
            logger.info(f"Tag created successfully: {tag.id}")
            return tag.model_copy()

    async def all(self) -> list[TagEntity]:
        async with self._store.lock.read():
            return [self._store.tags[tag_id].model_copy() for tag_id in sorted(self._store.tags)]

    async def delete(self, tag_id: int) -> None:
        async with self._store.lock.write():
            if self._store.tags.pop(tag_id, None) is None:
                raise TagNotFoundError(tag_id)
            for post in self._store.posts.values():
                post.tag_ids = [existing for existing in post.tag_ids if existing != tag_id]
        logger.info(f"Tag {tag_id} deleted")
