from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
import logging

from blog_api.exceptions import DuplicateError, TagNotFoundError, UnexpectedError
from blog_api.models import Tag, post_tags
from blog_api.repositories.base import TagRepository
from blog_api.schemas.tag import TagEntity

logger = logging.getLogger(__name__)


class SQLAlchemyTagRepository(TagRepository):
    """Tag store backed by the tags table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create(self, name: str) -> TagEntity:
        """
        Insert a tag unless one with the same name already exists.

        The lookup and the insert are separate statements. Two concurrent
        calls with the same new name can both pass the lookup; the unique
        index on tags.name then rejects the second insert, which surfaces as
        UnexpectedError rather than DuplicateError.

        Raises:
            DuplicateError: If a tag with this exact name exists.
            UnexpectedError: On any database failure.
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(select(Tag).where(Tag.name == name))
                    existing = result.scalars().first()
                    if existing:
                        raise DuplicateError("Tag", "name", name, resource_id=existing.id)

                    tag = Tag(name=name)
                    session.add(tag)
                    await session.flush()
                    created = TagEntity.model_validate(tag)
        except SQLAlchemyError as e:
            logger.error(f"Error creating tag '{name}': {str(e)}")
            raise UnexpectedError(str(e), operation="create_tag") from e

        logger.info(f"Tag created successfully: {created.id}")
        return created

    async def all(self) -> list[TagEntity]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(Tag).order_by(Tag.id.asc()))
                return [TagEntity.model_validate(tag) for tag in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error listing tags: {str(e)}")
            raise UnexpectedError(str(e), operation="list_tags") from e

    async def delete(self, tag_id: int) -> None:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    # Same effect as the ON DELETE CASCADE, kept explicit so the
                    # removal is part of this transaction on every backend
                    await session.execute(delete(post_tags).where(post_tags.c.tag_id == tag_id))
                    result = await session.execute(delete(Tag).where(Tag.id == tag_id))
                    if result.rowcount == 0:
                        raise TagNotFoundError(tag_id)
        except SQLAlchemyError as e:
            logger.error(f"Error deleting tag {tag_id}: {str(e)}")
            raise UnexpectedError(str(e), operation="delete_tag") from e

        logger.info(f"Tag {tag_id} deleted")
