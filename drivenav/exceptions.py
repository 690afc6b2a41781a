# exceptions.py

class PermanentError(Exception):
    """An error that will not be fixed by a retry (e.g., a missing folder)."""
    pass

class TransientError(Exception):
    """A temporary error (e.g., a network failure) that might resolve on a retry."""
    pass


class NotFoundError(PermanentError):
    """A node id or name could not be resolved."""
    pass


class AmbiguousNameError(PermanentError):
    """A name required to be unique matched more than one node."""

    def __init__(self, role: str, name: str):
        self.role = role
        self.name = name
        super().__init__(f"{role.capitalize()} folder name '{name}' is not unique")


class CollisionError(PermanentError):
    """The destination already holds a child with the moved node's name."""
    pass


class TransientIOError(TransientError):
    """A read or write against the remote store failed."""
    pass


class CycleError(PermanentError):
    """A move would place a folder inside itself or one of its descendants."""
    pass
