"""Domain exceptions."""


class PagePermError(Exception):
    """Base exception for pageperm."""

    pass


class PermissionDenied(PagePermError):
    """Caller is not allowed to perform the requested action."""

    pass


class NotFound(PagePermError):
    """Requested resource was not found."""

    pass


class PageNotFound(NotFound):
    """Page does not exist."""

    def __init__(self, page_id: object) -> None:
        super().__init__("Page", str(page_id))
        self.page_id = page_id

    def __str__(self) -> str:
        return "Page not found"


class PermissionNotFound(NotFound):
    """Page permission does not exist."""

    def __init__(self, permission_id: object) -> None:
        super().__init__("PagePermission", str(permission_id))
        self.permission_id = permission_id

    def __str__(self) -> str:
        return "Permission not found"


class ValidationError(PagePermError):
    """Validation failed for input data."""

    pass


class InvalidGrantShape(ValidationError):
    """Neither or both of user and group were supplied."""

    pass


class InvalidRole(ValidationError):
    """Role value is not one of reader, writer, admin."""

    pass


class EmptyBatch(ValidationError):
    """Batch grant received no user ids and no group ids."""

    pass


class BatchTooLarge(ValidationError):
    """Batch grant received more ids than allowed per call."""

    pass


class DuplicateGrant(PagePermError):
    """Principal already holds a grant on the page."""

    pass


class RoleEscalation(PagePermError):
    """Page role would exceed the principal's space role."""

    pass
