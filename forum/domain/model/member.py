"""Read-only view of a community member."""

from forum.domain.model.common import DomainModel
from forum.domain.value import DisplayName, UserId


class Member(DomainModel):
    """Author information shown next to comments."""

    id: UserId
    display_name: DisplayName
