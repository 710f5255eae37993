from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from blog_api.constants import TITLE_MAX_LENGTH, TITLE_MIN_LENGTH
from blog_api.database import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    body = Column(Text, nullable=False)

    __table_args__ = (
        CheckConstraint(
            f"length(title) >= {TITLE_MIN_LENGTH} AND length(title) <= {TITLE_MAX_LENGTH}",
            name="ck_posts_title_length",
        ),
    )
