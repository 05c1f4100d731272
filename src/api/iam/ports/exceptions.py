"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
repository operations. They should be caught and handled by the
application layer.
"""


class DuplicateRoleNameError(Exception):
    """Raised when attempting to save a role whose name is already taken.

    Role names are globally unique. The application layer should handle
    this and provide appropriate feedback to the user.
    """

    pass


class DuplicateIdentityError(Exception):
    """Raised when a second user is created for the same login identity."""

    pass


class RoleNotFoundError(Exception):
    """Raised when a role referenced by an operation does not exist."""

    pass


class UserNotFoundError(Exception):
    """Raised when a user referenced by an operation does not exist."""

    pass
