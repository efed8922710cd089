class NotFoundError(Exception):
    """Requested row does not exist."""


class ParentNotFoundError(Exception):
    """A referenced parent row (grade, subject, lesson, ...) does not exist."""


class AlreadyLinkedError(Exception):
    """The curriculum link being created is already present."""
