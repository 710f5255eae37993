"""
Application-wide constants shared by the ORM models, schemas and repositories.
"""

# Posts
TITLE_MIN_LENGTH = 1
TITLE_MAX_LENGTH = 100

# Tags
TAG_NAME_MAX_LENGTH = 100
