"""
Post feed endpoints: posts, likes and comments.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.dependencies import AuthContext, get_auth_context, get_current_user
from ..database import get_db
from ..dependencies import validated_body
from ..models import User
from ..schemas import CommentResponse, LikeResponse, MessageResponse, PostResponse, TextRequest
from ..services import post_service

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("", response_model=PostResponse)
def create_post(
    current_user: User = Depends(get_current_user),
    payload: TextRequest = Depends(validated_body(TextRequest, 400)),
    db: Session = Depends(get_db),
) -> PostResponse:
    post = post_service.create_post(db, current_user, payload.text)
    return PostResponse.model_validate(post)


@router.get("", response_model=list[PostResponse])
def list_posts(db: Session = Depends(get_db)) -> list[PostResponse]:
    """All posts, newest first."""
    return [PostResponse.model_validate(post) for post in post_service.list_posts(db)]


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, db: Session = Depends(get_db)) -> PostResponse:
    return PostResponse.model_validate(post_service.get_post(db, post_id))


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Delete a post. Only its author may do so."""
    post_service.delete_post(db, auth.user_id, post_id)
    return MessageResponse(message="Post removed")


# =============================================================================
# Likes
# =============================================================================


@router.put("/like/{post_id}", response_model=list[LikeResponse])
def like_post(
    post_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
) -> list[LikeResponse]:
    likes = post_service.like_post(db, auth.user_id, post_id)
    return [LikeResponse.model_validate(like) for like in likes]


@router.put("/unlike/{post_id}", response_model=list[LikeResponse])
def unlike_post(
    post_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
) -> list[LikeResponse]:
    likes = post_service.unlike_post(db, auth.user_id, post_id)
    return [LikeResponse.model_validate(like) for like in likes]


# =============================================================================
# Comments
# =============================================================================


@router.put("/comment/{post_id}", response_model=list[CommentResponse])
def add_comment(
    post_id: str,
    current_user: User = Depends(get_current_user),
    payload: TextRequest = Depends(validated_body(TextRequest, 400)),
    db: Session = Depends(get_db),
) -> list[CommentResponse]:
    comments = post_service.add_comment(db, current_user, post_id, payload.text)
    return [CommentResponse.model_validate(comment) for comment in comments]


@router.delete("/comment/{post_id}/{comment_id}", response_model=list[CommentResponse])
def delete_comment(
    post_id: str,
    comment_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
) -> list[CommentResponse]:
    """Delete a comment. Only its author may do so."""
    comments = post_service.delete_comment(db, auth.user_id, post_id, comment_id)
    return [CommentResponse.model_validate(comment) for comment in comments]
