from sqlalchemy import Column, Integer, String
from blog_api.constants import TAG_NAME_MAX_LENGTH
from blog_api.database import Base


class Tag(Base):
    __tablename__ = "tags"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(TAG_NAME_MAX_LENGTH), unique=True, index=True, nullable=False)
