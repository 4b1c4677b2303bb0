"""Read-side assembly of comment trees."""

import math
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

import logfire
from pydantic import BaseModel

from forum.config import CommentSettings
from forum.domain.error import NotFoundError, ValidationError
from forum.domain.model.comment import Comment
from forum.domain.model.member import Member
from forum.domain.repository import CommentRepository, MemberDirectory, PostRepository
from forum.domain.value import (
    CommentId,
    CommentSort,
    PostId,
    UserId,
    VotableType,
    VoteValue,
)

from .base import Service
from .vote_service import VoteService


class CommentNode(BaseModel):
    """Comment as shown to one viewer.

    ``children`` holds the first page of direct replies for listed
    comments and is always empty for the replies themselves; deeper
    levels are fetched on demand using ``reply_count``.
    """

    comment_id: CommentId
    post_id: PostId
    parent_comment_id: Optional[CommentId]
    depth: int
    author_id: UserId
    author_display_name: str
    mine: bool
    deleted: bool
    edited: bool
    body: Optional[str]  # None when deleted
    up_count: int
    down_count: int
    score: int
    my_vote: Optional[VoteValue]
    reply_count: int
    created_at: datetime
    updated_at: datetime
    children: list["CommentNode"] = []


class CommentPage(BaseModel):
    """One page of comment nodes."""

    items: list[CommentNode]
    page: int
    size: int
    total: int
    total_pages: int
    has_next: bool


class CommentTreeService(Service):
    """Builds pages of comment trees.

    A page costs a fixed number of batched lookups (votes, authors and
    reply counts) plus one replies query per listed comment. It never
    writes.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        member_directory: MemberDirectory,
        vote_service: VoteService,
        comment_settings: CommentSettings,
    ) -> None:
        """Initialize comment tree service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository
            member_directory: Author lookups
            vote_service: Viewer vote lookups
            comment_settings: Page size configuration
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.member_directory = member_directory
        self.vote_service = vote_service
        self.comment_settings = comment_settings

    async def build(
        self,
        post_id: PostId,
        parent_comment_id: Optional[CommentId] = None,
        viewer_id: Optional[UserId] = None,
        sort: CommentSort = CommentSort.NEW,
        page: int = 0,
        size: Optional[int] = None,
    ) -> CommentPage:
        """Build one page of comments with their first level of replies.

        Args:
            post_id: Post whose comments are listed
            parent_comment_id: List this comment's replies instead of roots
            viewer_id: Viewer, for ``mine`` and ``my_vote`` (None if anonymous)
            sort: Ordering of the page and of preloaded replies
            page: Zero-based page number
            size: Page size (defaults to the configured size, capped at the maximum)

        Returns:
            The page envelope with its nodes

        Raises:
            ValidationError: If page is negative or size is not positive
            NotFoundError: If the post or parent comment does not exist
        """
        size = self._page_size(size)
        if page < 0:
            raise ValidationError("Page must be >= 0", page=page)

        with logfire.span(
            "comment_tree_service.build",
            post_id=str(post_id),
            parent_comment_id=str(parent_comment_id) if parent_comment_id else None,
            page=page,
            size=size,
        ):
            if await self.post_repository.find_by_id(post_id) is None:
                raise NotFoundError("post", str(post_id))

            offset = page * size
            if parent_comment_id is None:
                listed = await self.comment_repository.find_roots(
                    post_id, sort, limit=size, offset=offset
                )
                total = await self.comment_repository.count_roots(post_id)
            else:
                parent = await self.comment_repository.find_by_id(parent_comment_id)
                if parent is None or parent.post_id != post_id:
                    raise NotFoundError("comment", str(parent_comment_id))
                listed = await self.comment_repository.find_replies(
                    post_id, parent_comment_id, sort, limit=size, offset=offset
                )
                total = await self.comment_repository.count_replies(
                    post_id, parent_comment_id
                )

            children: dict[CommentId, list[Comment]] = {}
            reply_page_size = self.comment_settings.reply_page_size
            for comment in listed:
                children[comment.id] = (
                    await self.comment_repository.find_replies(
                        post_id, comment.id, sort, limit=reply_page_size, offset=0
                    )
                    if reply_page_size > 0
                    else []
                )

            everything = listed + [c for replies in children.values() for c in replies]
            comment_ids = [c.id for c in everything]

            reply_counts = await self.comment_repository.count_replies_by_parents(
                comment_ids
            )
            my_votes = await self.vote_service.get_my_votes(
                viewer_id, VotableType.COMMENT, comment_ids
            )
            authors = await self._authors([c.author_id for c in everything])

            def to_node(comment: Comment, nested: list[CommentNode]) -> CommentNode:
                return CommentNode(
                    comment_id=comment.id,
                    post_id=comment.post_id,
                    parent_comment_id=comment.parent_id,
                    depth=comment.depth,
                    author_id=comment.author_id,
                    author_display_name=str(authors[comment.author_id].display_name),
                    mine=viewer_id is not None and comment.author_id == viewer_id,
                    deleted=comment.is_deleted,
                    edited=comment.edited,
                    body=None if comment.is_deleted else comment.body.root,
                    up_count=comment.up_count,
                    down_count=comment.down_count,
                    score=comment.score,
                    my_vote=my_votes.get(comment.id),
                    reply_count=reply_counts.get(comment.id, 0),
                    created_at=comment.created_at,
                    updated_at=comment.updated_at,
                    children=nested,
                )

            items = [
                to_node(comment, [to_node(child, []) for child in children[comment.id]])
                for comment in listed
            ]

            total_pages = math.ceil(total / size) if total else 0
            logfire.info(
                "Comment page built",
                post_id=str(post_id),
                page=page,
                items=len(items),
                total=total,
            )
            return CommentPage(
                items=items,
                page=page,
                size=size,
                total=total,
                total_pages=total_pages,
                has_next=page + 1 < total_pages,
            )

    def _page_size(self, size: Optional[int]) -> int:
        if size is None:
            return self.comment_settings.default_page_size
        if size < 1:
            raise ValidationError("Page size must be >= 1", size=size)
        return min(size, self.comment_settings.max_page_size)

    async def _authors(self, author_ids: Sequence[UserId]) -> dict[UUID, Member]:
        unique_ids = list(dict.fromkeys(author_ids))
        members = {m.id: m for m in await self.member_directory.find_by_ids(unique_ids)}
        for author_id in unique_ids:
            if author_id not in members:
                logfire.error("Comment author not found", author_id=str(author_id))
                raise NotFoundError("member", str(author_id))
        return members
