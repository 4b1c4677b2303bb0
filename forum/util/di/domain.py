"""Domain layer DI providers."""

from dishka import Scope, provide

from forum.config import AuthSettings, CommentSettings, VotingSettings
from forum.domain.repository import (
    CommentRepository,
    MemberDirectory,
    PostRepository,
    TransactionManager,
    VoteRepository,
)
from forum.domain.service import (
    CommentService,
    CommentTreeService,
    JWTService,
    VoteService,
)
from forum.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        member_directory: MemberDirectory,
        transactions: TransactionManager,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
            member_directory=member_directory,
            transactions=transactions,
            voting_settings=voting_settings,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        member_directory: MemberDirectory,
        transactions: TransactionManager,
        voting_settings: VotingSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            member_directory=member_directory,
            transactions=transactions,
            voting_settings=voting_settings,
        )

    @provide
    def get_comment_tree_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        member_directory: MemberDirectory,
        vote_service: VoteService,
        comment_settings: CommentSettings,
    ) -> CommentTreeService:
        """Provide comment tree read service."""
        return CommentTreeService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            member_directory=member_directory,
            vote_service=vote_service,
            comment_settings=comment_settings,
        )
