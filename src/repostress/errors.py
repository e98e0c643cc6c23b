"""Exception taxonomy for the store, workflow, and action layers.

Services translate these into :class:`~repostress.services.result.ServiceError`
payloads; everything below the service layer raises and propagates them.
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base class for failures reported by the content repository."""

    code = "REPOSITORY"


class ItemNotFoundError(RepositoryError):
    """A path or node handle no longer resolves to a stored node."""

    code = "NOT_FOUND"


class ItemExistsError(RepositoryError):
    """A sibling with the requested name already exists."""

    code = "ITEM_EXISTS"


class InvalidNameError(RepositoryError):
    """A node name violates the naming rules of the store."""

    code = "INVALID_NAME"


class ConcurrentModificationError(RepositoryError):
    """The store could not acquire its write lock in time."""

    code = "CONCURRENT_MODIFICATION"


class WorkflowError(RepositoryError):
    """A workflow is unavailable or refused the requested operation."""

    code = "WORKFLOW"


class ActionError(Exception):
    """Base class for failures detected by an action itself."""

    code = "ACTION"


class PreconditionError(ActionError):
    """The node handed to an action does not have the required shape."""

    code = "PRECONDITION"


class PostconditionError(ActionError):
    """The store state after a successful workflow call is not the expected one."""

    code = "POSTCONDITION"


class NameSpaceExhaustedError(ActionError):
    """No free name was found within the allowed number of draws."""

    code = "NAME_SPACE_EXHAUSTED"

    def __init__(self, base: str, attempts: int, last_candidate: str) -> None:
        super().__init__(
            f"No free name derived from {base!r} after {attempts} attempts "
            f"(last candidate {last_candidate!r})"
        )
        self.base = base
        self.attempts = attempts
        self.last_candidate = last_candidate
