"""
Errors raised by the book status services.
"""


class BookServiceError(Exception):
    """Base class for errors raised by the services package."""


class MemberNotFoundError(BookServiceError, LookupError):
    """The member id does not resolve to a member."""

    def __init__(self, member_id: int):
        self.member_id = member_id
        super().__init__(f"Member not found: {member_id}")


class InvalidBookStatusError(BookServiceError, ValueError):
    """The status tab is not one of WISH, READING, COMPLETED or STOPPED."""

    def __init__(self, tab_condition):
        self.tab_condition = tab_condition
        super().__init__(
            f"Invalid book status: {tab_condition!r}. "
            f"Must be one of: WISH, READING, COMPLETED, STOPPED"
        )
