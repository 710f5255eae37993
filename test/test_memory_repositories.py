"""
Tests for the in-memory repositories

Covers the in-memory store's own rules: duplicate tag names return the
existing tag, unknown tag ids raise TagNotFoundError without side effects,
and reads and writes go through the store's reader/writer lock.
"""

import asyncio

import pytest

from blog_api.exceptions import PostNotFoundError, TagNotFoundError, UnexpectedError
from blog_api.repositories.memory import InMemoryPostRepository, InMemoryStore, InMemoryTagRepository
from blog_api.schemas.post import PostCreate, PostUpdate


class TestInMemoryTagRepository:
    """Tag store specifics"""

    @pytest.mark.asyncio
    async def test_duplicate_name_returns_existing_tag(self, memory_tag_repository):
        """Unlike the SQLAlchemy store, a repeated name is not an error"""
        first = await memory_tag_repository.create("python")
        second = await memory_tag_repository.create("python")

        assert second == first
        assert await memory_tag_repository.all() == [first]

    @pytest.mark.asyncio
    async def test_ids_are_not_reused_after_delete(self, memory_tag_repository):
        first = await memory_tag_repository.create("a")
        second = await memory_tag_repository.create("b")
        await memory_tag_repository.delete(first.id)

        third = await memory_tag_repository.create("c")

        assert third.id not in (first.id, second.id)

    @pytest.mark.asyncio
    async def test_returned_tag_is_a_copy(self, memory_tag_repository):
        tag = await memory_tag_repository.create("python")
        tag.name = "mutated"

        assert (await memory_tag_repository.all())[0].name == "python"


class TestInMemoryPostRepository:
    """Post store specifics"""

    @pytest.mark.asyncio
    async def test_create_with_unknown_tag(self, memory_post_repository, memory_store):
        """An unresolved tag id raises cleanly and stores nothing"""
        with pytest.raises(TagNotFoundError) as exc_info:
            await memory_post_repository.create(PostCreate(title="Title", body="Body", tags=[404]))

        assert exc_info.value.resource_id == 404
        assert memory_store.posts == {}

    @pytest.mark.asyncio
    async def test_update_with_unknown_tag_keeps_post(self, memory_post_repository, memory_tag_repository):
        tag = await memory_tag_repository.create("python")
        created = await memory_post_repository.create(PostCreate(title="Title", body="Body", tags=[tag.id]))

        with pytest.raises(TagNotFoundError):
            await memory_post_repository.update(created.id, PostUpdate(title="Changed", tags=[404]))

        assert await memory_post_repository.find(created.id) == created

    @pytest.mark.asyncio
    async def test_update_title_out_of_bounds_is_unexpected(self, memory_post_repository):
        created = await memory_post_repository.create(PostCreate(title="Title", body="Body"))
        payload = PostUpdate.model_construct(title="x" * 101, body=None, tags=None)

        with pytest.raises(UnexpectedError):
            await memory_post_repository.update(created.id, payload)

        assert (await memory_post_repository.find(created.id)).title == "Title"

    @pytest.mark.asyncio
    async def test_ids_follow_a_sequence(self, memory_post_repository):
        """Ids keep increasing after deletes instead of reusing len(store) + 1"""
        first = await memory_post_repository.create(PostCreate(title="First", body="Body"))
        await memory_post_repository.delete(first.id)

        second = await memory_post_repository.create(PostCreate(title="Second", body="Body"))

        assert second.id > first.id
        with pytest.raises(PostNotFoundError):
            await memory_post_repository.find(first.id)

    @pytest.mark.asyncio
    async def test_returned_post_does_not_alias_store(self, memory_post_repository, memory_tag_repository):
        tag = await memory_tag_repository.create("python")
        created = await memory_post_repository.create(PostCreate(title="Title", body="Body", tags=[tag.id]))

        created.tags.clear()
        created.title = "mutated"

        found = await memory_post_repository.find(created.id)
        assert found.title == "Title"
        assert found.tags == [tag]

    @pytest.mark.asyncio
    async def test_repositories_share_one_store(self):
        store = InMemoryStore()
        tags = InMemoryTagRepository(store)
        posts = InMemoryPostRepository(store)

        tag = await tags.create("python")
        created = await posts.create(PostCreate(title="Title", body="Body", tags=[tag.id]))

        assert store.posts[created.id].tag_ids == [tag.id]
        assert store.tags[tag.id] == tag


class TestInMemoryConcurrency:
    """Readers and writers through the shared lock"""

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_unique_ids(self, memory_post_repository):
        created = await asyncio.gather(
            *(memory_post_repository.create(PostCreate(title=f"Post {n}", body="Body")) for n in range(20))
        )

        assert len({post.id for post in created}) == 20
        assert len(await memory_post_repository.all()) == 20

    @pytest.mark.asyncio
    async def test_concurrent_reads_and_writes(self, memory_post_repository, memory_tag_repository):
        tag = await memory_tag_repository.create("python")
        created = await memory_post_repository.create(PostCreate(title="Title", body="Body", tags=[tag.id]))

        results = await asyncio.gather(
            memory_post_repository.find(created.id),
            memory_post_repository.update(created.id, PostUpdate(tags=[])),
            memory_post_repository.all(),
        )

        # Each read sees the post either before or after the update, never half of it
        for post in (results[0], results[2][0]):
            assert post.tags in ([tag], [])
        assert results[1].tags == []
