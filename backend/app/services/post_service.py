"""
Posts, likes and comments.
"""

from sqlalchemy.orm import Session

from devconnector.constants import (
    MSG_ALREADY_LIKED,
    MSG_COMMENT_NOT_FOUND,
    MSG_NOT_LIKED,
    MSG_POST_NOT_FOUND,
)
from devconnector.exceptions import ConflictError, NotAuthorizedError, NotFoundError
from devconnector.logging import get_logger
from devconnector.models import Post, PostComment, PostLike, User
from devconnector.repositories import PostRepository

from .common import parse_id

logger = get_logger("post_service")


def create_post(db: Session, author: User, text: str) -> Post:
    """Store a post with the author's current name and avatar."""
    post = PostRepository(db).create(
        user_id=author.id,
        text=text,
        name=author.name,
        avatar=author.avatar,
    )
    db.commit()
    logger.info("post_created", post_id=post.id, user_id=author.id)
    return post


def list_posts(db: Session) -> list[Post]:
    return PostRepository(db).list_newest_first()


def get_post(db: Session, raw_post_id: str) -> Post:
    """
    Load a post with its likes and comments.

    Raises:
        NotFoundError: 404 "Post not found", also for a malformed id
    """
    post_id = parse_id(raw_post_id)
    post = PostRepository(db).get_with_children(post_id) if post_id else None
    if post is None:
        raise NotFoundError(MSG_POST_NOT_FOUND)
    return post


def delete_post(db: Session, user_id: int, raw_post_id: str) -> None:
    post = get_post(db, raw_post_id)
    if post.user_id != user_id:
        logger.warning("post_delete_denied", post_id=post.id, user_id=user_id)
        raise NotAuthorizedError()

    PostRepository(db).delete(post.id)
    db.commit()
    logger.info("post_deleted", post_id=post.id, user_id=user_id)


def like_post(db: Session, user_id: int, raw_post_id: str) -> list[PostLike]:
    """
    Add the caller's like.

    Raises:
        ConflictError: 400 "Post already liked"
    """
    post = get_post(db, raw_post_id)
    if post.liked_by(user_id):
        raise ConflictError(MSG_ALREADY_LIKED)

    PostRepository(db).add_like(post, user_id)
    db.commit()
    logger.info("post_liked", post_id=post.id, user_id=user_id)
    return list(post.likes)


def unlike_post(db: Session, user_id: int, raw_post_id: str) -> list[PostLike]:
    """
    Remove the caller's like.

    Raises:
        ConflictError: 400 "Post has not yet been liked"
    """
    post = get_post(db, raw_post_id)
    if not PostRepository(db).remove_like(post, user_id):
        raise ConflictError(MSG_NOT_LIKED)

    db.commit()
    logger.info("post_unliked", post_id=post.id, user_id=user_id)
    return list(post.likes)


def add_comment(db: Session, author: User, raw_post_id: str, text: str) -> list[PostComment]:
    post = get_post(db, raw_post_id)
    comment = PostRepository(db).add_comment(
        post,
        user_id=author.id,
        text=text,
        name=author.name,
        avatar=author.avatar,
    )
    db.commit()
    logger.info("comment_added", post_id=post.id, comment_id=comment.id, user_id=author.id)
    return list(post.comments)


def delete_comment(
    db: Session, user_id: int, raw_post_id: str, raw_comment_id: str
) -> list[PostComment]:
    """
    Delete a comment written by the caller.

    Raises:
        NotFoundError: Post or comment does not exist
        NotAuthorizedError: The caller did not write the comment
    """
    post = get_post(db, raw_post_id)
    repo = PostRepository(db)

    comment_id = parse_id(raw_comment_id)
    comment = repo.get_comment(post, comment_id) if comment_id else None
    if comment is None:
        raise NotFoundError(MSG_COMMENT_NOT_FOUND)
    if comment.user_id != user_id:
        logger.warning("comment_delete_denied", comment_id=comment.id, user_id=user_id)
        raise NotAuthorizedError()

    repo.remove_comment(post, comment)
    db.commit()
    logger.info("comment_deleted", post_id=post.id, comment_id=comment_id, user_id=user_id)
    return list(post.comments)
