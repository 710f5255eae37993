from pydantic import BaseModel, Field

from blog_api.constants import TAG_NAME_MAX_LENGTH


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=TAG_NAME_MAX_LENGTH, title="Tag Name", description="The unique name of the tag.")


class TagEntity(BaseModel):
    id: int = Field(..., title="Tag ID", description="The unique identifier for the tag.")
    name: str = Field(..., title="Tag Name", description="The unique name of the tag.")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "python",
            }
        }
