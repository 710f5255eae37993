"""
Tests for post and tag schemas
"""

import pytest
from pydantic import ValidationError

from blog_api.schemas.post import PostCreate, PostEntity, PostUpdate
from blog_api.schemas.tag import TagCreate, TagEntity


class TestPostCreate:
    """Test PostCreate schema"""

    def test_tags_default_to_empty(self):
        post = PostCreate(title="Title", body="Body")
        assert post.tags == []

    def test_title_boundaries(self):
        assert PostCreate(title="x", body="").title == "x"
        assert len(PostCreate(title="x" * 100, body="").title) == 100

    @pytest.mark.parametrize("title", ["", "x" * 101])
    def test_title_out_of_bounds(self, title):
        with pytest.raises(ValidationError) as exc_info:
            PostCreate(title=title, body="Body")
        assert "title" in str(exc_info.value)

    def test_requires_body(self):
        with pytest.raises(ValidationError):
            PostCreate(title="Title")


class TestPostUpdate:
    """Test PostUpdate schema"""

    def test_everything_optional(self):
        update = PostUpdate()
        assert update.title is None
        assert update.body is None
        assert update.tags is None

    def test_empty_tag_list_is_kept_distinct_from_none(self):
        assert PostUpdate(tags=[]).tags == []

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            PostUpdate(title="")


class TestEntities:
    def test_post_entity_from_json(self):
        post = PostEntity.model_validate(
            {"id": 1, "title": "Title", "body": "Body", "tags": [{"id": 2, "name": "python"}]}
        )
        assert post.tags == [TagEntity(id=2, name="python")]

    def test_tag_create_requires_name(self):
        with pytest.raises(ValidationError):
            TagCreate(name="")
