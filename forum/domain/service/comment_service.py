"""Comment domain service."""

from typing import Optional

import logfire

from forum.config import VotingSettings
from forum.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from forum.domain.model.comment import Comment
from forum.domain.model.post import Post
from forum.domain.repository import (
    CommentRepository,
    MemberDirectory,
    PostRepository,
    TransactionManager,
)
from forum.domain.value import CommentBody, CommentId, PostId, UserId

from .base import Service, require_member, run_atomic


class CommentService(Service):
    """Domain service for comment operations.

    Creation and deletion also keep ``Post.comment_count`` in step, so
    every write goes through the same retry loop as voting: a concurrent
    vote on the post bumps its version.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        member_directory: MemberDirectory,
        transactions: TransactionManager,
        voting_settings: VotingSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository
            member_directory: Ban and moderator checks
            transactions: Unit-of-work boundary
            voting_settings: Retry configuration
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.member_directory = member_directory
        self.transactions = transactions
        self.voting_settings = voting_settings

    async def _load_post(self, post_id: PostId) -> Post:
        post = await self.post_repository.find_by_id(post_id)
        if post is None:
            logfire.warn("Post not found", post_id=str(post_id))
            raise NotFoundError("post", str(post_id))
        return post

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If the comment does not exist
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("comment", str(comment_id))
            return comment

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        body: str,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a comment on a post or reply to another comment.

        The reply depth always comes from the stored parent.

        Args:
            post_id: Post ID
            author_id: Author member ID
            body: Comment text
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            InvalidCommentBodyError: If body is blank or too long
            NotFoundError: If the post or parent is missing, or the author is unknown
            NotCommentableError: If the post does not accept comments
            NotAuthorizedError: If the author is banned from the community
            ValidationError: If the parent belongs to another post
        """
        CommentBody.parse(body)

        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_id=str(parent_id) if parent_id else None,
        ):

            async def create() -> Comment:
                post = await self._load_post(post_id)
                post.ensure_commentable()
                await require_member(self.member_directory, author_id)

                if not await self.member_directory.can_participate(post_id, author_id):
                    raise NotAuthorizedError(
                        "post", str(post_id), str(author_id), "comment on"
                    )

                if parent_id is None:
                    comment = Comment.create_root(post_id, author_id, body)
                else:
                    parent = await self.comment_repository.find_by_id(parent_id)
                    if parent is None:
                        logfire.error(
                            "Parent comment not found",
                            parent_id=str(parent_id),
                            post_id=str(post_id),
                        )
                        raise NotFoundError("comment", str(parent_id))
                    if parent.post_id != post_id:
                        logfire.error(
                            "Parent comment does not belong to post",
                            parent_id=str(parent_id),
                            parent_post_id=str(parent.post_id),
                            target_post_id=str(post_id),
                        )
                        raise ValidationError(
                            "Parent comment does not belong to this post",
                            parent_id=str(parent_id),
                            post_id=str(post_id),
                        )
                    comment = Comment.reply_to(
                        post_id, author_id, parent.id, parent.depth, body
                    )

                saved = await self.comment_repository.save(comment)
                await self.post_repository.save(post.increment_comment_count())
                return saved

            saved = await run_atomic(
                self.transactions,
                create,
                max_attempts=self.voting_settings.max_attempts,
                resource="post",
                identifier=str(post_id),
            )
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                depth=saved.depth,
            )
            return saved

    async def edit_comment(
        self, comment_id: CommentId, editor_id: UserId, body: str
    ) -> Comment:
        """Replace the text of a comment.

        Only the author may edit, and only while not banned.

        Raises:
            InvalidCommentBodyError: If body is blank or too long
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the editor is not the author or is banned
            ContentDeletedException: If the comment is deleted
        """
        CommentBody.parse(body)

        with logfire.span(
            "comment_service.edit_comment",
            comment_id=str(comment_id),
            editor_id=str(editor_id),
            body_length=len(body),
        ):

            async def edit() -> Comment:
                comment = await self.get_comment(comment_id)
                if comment.author_id != editor_id:
                    logfire.warn(
                        "Unauthorized comment edit attempt",
                        comment_id=str(comment_id),
                        author_id=str(comment.author_id),
                        editor_id=str(editor_id),
                    )
                    raise NotAuthorizedError(
                        "comment", str(comment_id), str(editor_id), "edit"
                    )
                if not await self.member_directory.can_participate(
                    comment.post_id, editor_id
                ):
                    raise NotAuthorizedError(
                        "comment", str(comment_id), str(editor_id), "edit"
                    )
                return await self.comment_repository.save(comment.edit(body))

            updated = await run_atomic(
                self.transactions,
                edit,
                max_attempts=self.voting_settings.max_attempts,
                resource="comment",
                identifier=str(comment_id),
            )
            logfire.info("Comment edited", comment_id=str(comment_id))
            return updated

    async def delete_comment(self, comment_id: CommentId, actor_id: UserId) -> Comment:
        """Soft-delete a comment.

        The author or a moderator of the post's community may delete.
        Replies stay in place under the deleted comment.

        Raises:
            NotFoundError: If the comment does not exist
            NotAuthorizedError: If the actor may not delete it
            ContentDeletedException: If the comment is already deleted
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            actor_id=str(actor_id),
        ):

            async def delete() -> Comment:
                comment = await self.get_comment(comment_id)
                if comment.author_id != actor_id and not (
                    await self.member_directory.is_moderator(comment.post_id, actor_id)
                ):
                    logfire.warn(
                        "Unauthorized comment delete attempt",
                        comment_id=str(comment_id),
                        actor_id=str(actor_id),
                    )
                    raise NotAuthorizedError(
                        "comment", str(comment_id), str(actor_id), "delete"
                    )

                deleted = await self.comment_repository.save(comment.soft_delete())
                post = await self._load_post(comment.post_id)
                await self.post_repository.save(post.decrement_comment_count())
                return deleted

            deleted = await run_atomic(
                self.transactions,
                delete,
                max_attempts=self.voting_settings.max_attempts,
                resource="comment",
                identifier=str(comment_id),
            )
            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                post_id=str(deleted.post_id),
            )
            return deleted
