from sqlalchemy import Table, Column, Integer, ForeignKey
from blog_api.database import Base

# Surrogate key keeps duplicate (post_id, tag_id) pairs and fixes the row order
post_tags = Table(
    "post_tags",
    Base.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("post_id", Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False, index=True),
)
