from fastapi import Request

from blog_api.repositories.base import PostRepository, TagRepository


def get_post_repository(request: Request) -> PostRepository:
    return request.app.state.post_repository


def get_tag_repository(request: Request) -> TagRepository:
    return request.app.state.tag_repository
