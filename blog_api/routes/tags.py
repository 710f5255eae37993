from fastapi import APIRouter, Depends, Response, status
from typing import List

from blog_api.dependencies import get_tag_repository
from blog_api.repositories.base import TagRepository
from blog_api.schemas.tag import TagCreate, TagEntity

router = APIRouter()


@router.post("/tags", response_model=TagEntity, status_code=status.HTTP_201_CREATED)
async def create_tag(payload: TagCreate, repository: TagRepository = Depends(get_tag_repository)):
    return await repository.create(payload.name)


@router.get("/tags", response_model=List[TagEntity])
async def list_tags(repository: TagRepository = Depends(get_tag_repository)):
    return await repository.all()


@router.delete("/tags/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(tag_id: int, repository: TagRepository = Depends(get_tag_repository)):
    await repository.delete(tag_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
