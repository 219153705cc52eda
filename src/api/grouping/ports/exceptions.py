"""Domain exceptions for the grouping bounded context.

Two families are raised: InvalidOperationError when a precondition fails
before any state change, and NotFoundError when a caller names something
that does not exist. Both indicate caller error and are never retried.
Cardinality violations are not exceptions; see grouping.domain.violations.
"""


class GroupingError(Exception):
    """Base class for all grouping errors."""

    pass


class InvalidOperationError(GroupingError):
    """Raised when a precondition is violated before a state change."""

    pass


class UnsavedEntityError(InvalidOperationError):
    """Raised when adding an entity without a persisted identity to a group."""

    pass


class UnsavedGroupError(InvalidOperationError):
    """Raised when adding an entity to a group without a persisted identity."""

    pass


class EntityTypeMismatchError(InvalidOperationError):
    """Raised when the relation type does not serve the entity's type."""

    pass


class BundleMismatchError(InvalidOperationError):
    """Raised when the relation type is restricted to another bundle."""

    pass


class InvalidEntityIdentityError(InvalidOperationError):
    """Raised when a content entity does not have an integer identity.

    Configuration entities must go through a relation type that handles
    them, which stores their integer surrogate instead.
    """

    pass


class EnforcedRelationTypeError(InvalidOperationError):
    """Raised when attempting to disable an enforced relation type."""

    pass


class RelationTypeInUseError(InvalidOperationError):
    """Raised when disabling a relation type that still has relationships."""

    pass


class NotFoundError(GroupingError):
    """Raised when a referenced object does not exist."""

    pass


class RelationTypeNotFoundError(NotFoundError):
    """Raised when a relation type ID is not in the registry."""

    pass


class RelationTypeNotInstalledError(NotFoundError):
    """Raised when a relation type is not enabled on the group's type."""

    pass


class ContentTypeNotFoundError(NotFoundError):
    """Raised when a content type ID has no persisted record."""

    pass


class GroupTypeNotFoundError(NotFoundError):
    """Raised when a group type ID has no persisted record."""

    pass


class DuplicateGroupTypeError(GroupingError):
    """Raised when creating a group type whose ID is already taken."""

    pass
