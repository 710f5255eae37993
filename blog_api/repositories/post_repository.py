from sqlalchemy import delete, insert, select
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from typing import Optional
import logging

from blog_api.exceptions import PostNotFoundError, UnexpectedError
from blog_api.models import Post, Tag, post_tags
from blog_api.repositories.base import PostRepository
from blog_api.repositories.fold import fold_rows
from blog_api.schemas.post import PostCreate, PostEntity, PostTagRow, PostUpdate

logger = logging.getLogger(__name__)


def _post_tag_rows_query():
    return (
        select(
            Post.id.label("post_id"),
            Post.title,
            Post.body,
            Tag.id.label("tag_id"),
            Tag.name.label("tag_name"),
        )
        .select_from(Post)
        .outerjoin(post_tags, post_tags.c.post_id == Post.id)
        .outerjoin(Tag, Tag.id == post_tags.c.tag_id)
    )


class SQLAlchemyPostRepository(PostRepository):
    """
    Post store backed by the posts, tags and post_tags tables.

    Every call opens its own session. Writes that touch more than one
    statement run inside session.begin(), which commits when the block exits
    normally and rolls back when anything raises, so a post row is never
    visible without its associations.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def _fetch_posts(self, session: AsyncSession, post_id: Optional[int] = None) -> list[PostEntity]:
        query = _post_tag_rows_query()
        if post_id is not None:
            query = query.where(Post.id == post_id).order_by(post_tags.c.id)
        else:
            query = query.order_by(Post.id.desc(), post_tags.c.id)

        result = await session.execute(query)
        return fold_rows(PostTagRow(**row._mapping) for row in result)

    @staticmethod
    async def _attach_tags(session: AsyncSession, post_id: int, tag_ids: list[int]) -> None:
        if not tag_ids:
            return
        await session.execute(
            insert(post_tags),
            [{"post_id": post_id, "tag_id": tag_id} for tag_id in tag_ids],
        )

    async def create(self, payload: PostCreate) -> PostEntity:
        """
        Insert a post and one association row per requested tag id.

        Args:
            payload (PostCreate): Title, body and tag ids of the new post.

        Returns:
            PostEntity: The stored post, re-read through find().

        Raises:
            PostNotFoundError: If the storage layer rejects the post row itself.
            UnexpectedError: If a tag id does not exist or the database fails.
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    post = Post(title=payload.title, body=payload.body)
                    session.add(post)
                    try:
                        await session.flush()
                    except (IntegrityError, DataError) as e:
                        logger.warning(f"Post row rejected by the database: {e}")
                        raise PostNotFoundError() from e

                    post_id = post.id
                    await self._attach_tags(session, post_id, payload.tags)
        except SQLAlchemyError as e:
            logger.error(f"Error creating post: {str(e)}")
            raise UnexpectedError(str(e), operation="create_post") from e

        logger.info(f"Post created successfully: {post_id}")
        return await self.find(post_id)

    async def find(self, post_id: int) -> PostEntity:
        try:
            async with self._session_factory() as session:
                posts = await self._fetch_posts(session, post_id)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching post {post_id}: {str(e)}")
            raise UnexpectedError(str(e), operation="find_post") from e

        if not posts:
            raise PostNotFoundError(post_id)
        return posts[0]

    async def all(self) -> list[PostEntity]:
        try:
            async with self._session_factory() as session:
                return await self._fetch_posts(session)
        except SQLAlchemyError as e:
            logger.error(f"Error listing posts: {str(e)}")
            raise UnexpectedError(str(e), operation="list_posts") from e

    async def update(self, post_id: int, payload: PostUpdate) -> PostEntity:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    post = await session.get(Post, post_id)
                    if post is None:
                        raise PostNotFoundError(post_id)

                    for field, value in payload.model_dump(exclude_none=True, exclude={"tags"}).items():
                        setattr(post, field, value)

                    if payload.tags is not None:
                        await session.execute(delete(post_tags).where(post_tags.c.post_id == post_id))
                        await self._attach_tags(session, post_id, payload.tags)
        except SQLAlchemyError as e:
            logger.error(f"Error updating post {post_id}: {str(e)}")
            raise UnexpectedError(str(e), operation="update_post") from e

        logger.info(f"Post {post_id} updated")
        return await self.find(post_id)

    async def delete(self, post_id: int) -> None:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    # A post without tags has nothing to remove here
                    await session.execute(delete(post_tags).where(post_tags.c.post_id == post_id))
                    result = await session.execute(delete(Post).where(Post.id == post_id))
                    if result.rowcount == 0:
                        raise PostNotFoundError(post_id)
        except SQLAlchemyError as e:
            logger.error(f"Error deleting post {post_id}: {str(e)}")
            raise UnexpectedError(str(e), operation="delete_post") from e

        logger.info(f"Post {post_id} deleted")
