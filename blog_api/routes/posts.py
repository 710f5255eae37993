from fastapi import APIRouter, Depends, Response, status
from typing import List

from blog_api.dependencies import get_post_repository
from blog_api.repositories.base import PostRepository
from blog_api.schemas.post import PostCreate, PostEntity, PostUpdate

router = APIRouter()


@router.post("/posts", response_model=PostEntity, status_code=status.HTTP_201_CREATED)
async def create_post(payload: PostCreate, repository: PostRepository = Depends(get_post_repository)):
    return await repository.create(payload)


@router.get("/posts", response_model=List[PostEntity])
async def list_posts(repository: PostRepository = Depends(get_post_repository)):
    return await repository.all()


@router.get("/posts/{post_id}", response_model=PostEntity)
async def find_post(post_id: int, repository: PostRepository = Depends(get_post_repository)):
    return await repository.find(post_id)


# Updates answer 201 like creation does
@router.patch("/posts/{post_id}", response_model=PostEntity, status_code=status.HTTP_201_CREATED)
async def update_post(post_id: int, payload: PostUpdate, repository: PostRepository = Depends(get_post_repository)):
    return await repository.update(post_id, payload)


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: int, repository: PostRepository = Depends(get_post_repository)):
    await repository.delete(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
