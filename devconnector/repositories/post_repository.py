"""Post repository: posts with their likes and comments."""

from sqlalchemy.orm import selectinload

from devconnector.models import Post, PostComment, PostLike

from .base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Repository for Post operations."""

    model = Post

    def _query(self):
        return self.session.query(Post).options(
            selectinload(Post.likes),
            selectinload(Post.comments),
        )

    def get_with_children(self, post_id: int) -> Post | None:
        """Get a post with likes and comments loaded."""
        return self._query().filter(Post.id == post_id).first()

    def list_newest_first(self) -> list[Post]:
        return self._query().order_by(Post.created_at.desc(), Post.id.desc()).all()

    def add_like(self, post: Post, user_id: int) -> PostLike:
        """
        Insert a like row.

        A concurrent duplicate is rejected by the (post_id, user_id) unique
        constraint and surfaces as IntegrityError on flush.
        """
        like = PostLike(post_id=post.id, user_id=user_id)
        self.session.add(like)
        self.session.flush()
        self.session.expire(post, ["likes"])
        return like

    def remove_like(self, post: Post, user_id: int) -> bool:
        removed = (
            self.session.query(PostLike)
            .filter(PostLike.post_id == post.id, PostLike.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.expire(post, ["likes"])
        return bool(removed)

    def add_comment(
        self, post: Post, user_id: int, text: str, name: str | None, avatar: str | None
    ) -> PostComment:
        comment = PostComment(
            post_id=post.id, user_id=user_id, text=text, name=name, avatar=avatar
        )
        self.session.add(comment)
        self.session.flush()
        self.session.expire(post, ["comments"])
        return comment

    def get_comment(self, post: Post, comment_id: int) -> PostComment | None:
        return (
            self.session.query(PostComment)
            .filter(PostComment.post_id == post.id, PostComment.id == comment_id)
            .first()
        )

    def remove_comment(self, post: Post, comment: PostComment) -> None:
        self.session.delete(comment)
        self.session.flush()
        self.session.expire(post, ["comments"])
