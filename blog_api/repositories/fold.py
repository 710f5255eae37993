from typing import Iterable

from blog_api.schemas.post import PostEntity, PostTagRow
from blog_api.schemas.tag import TagEntity


def fold_rows(rows: Iterable[PostTagRow]) -> list[PostEntity]:
    """
    Group flat post/tag join rows into hydrated posts.

    Posts come out in the order their first row was seen, and each post's tags
    keep the order of its rows. A row with no tag (the outer join found none)
    only registers the post.

    Args:
        rows: Join rows, already in the order the query produced them.

    Returns:
        list[PostEntity]: One entry per distinct post_id.
    """
    posts: dict[int, PostEntity] = {}
    for row in rows:
        post = posts.get(row.post_id)
        if post is None:
            post = PostEntity(id=row.post_id, title=row.title, body=row.body, tags=[])
            posts[row.post_id] = post
        if row.tag_id is not None:
            post.tags.append(TagEntity(id=row.tag_id, name=row.tag_name))
    return list(posts.values())
