from __future__ import annotations

"""
Counting Domain Errors.

Every failure the counting engine can surface derives from IcounterError,
and carries the offending path so interfaces can report it verbatim.
Permission-denied conditions are not represented here: they are recovered
locally by the traversal and only reported as diagnostics.
"""

from typing import Optional


class IcounterError(Exception):
    """Base class for fatal counting errors."""

    def __init__(self, path: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.path = path
        self.cause = cause


class MissingParentError(IcounterError):
    """An entry was discovered whose parent directory is not in the map."""

    def __init__(self, path: str, parent: str):
        super().__init__(path, f"Parent '{parent}' of '{path}' not found in map.")
        self.parent = parent


class MissingNodeError(IcounterError):
    """A directory was requested that the traversal never recorded."""

    def __init__(self, path: str):
        super().__init__(path, f"Node '{path}' not found in map.")


class NodeStateError(IcounterError):
    """A node was finalized more than once."""

    def __init__(self, path: str):
        super().__init__(path, f"Node '{path}' is already finalized.")


class TraversalError(IcounterError):
    """Non-recoverable I/O failure during the bounded traversal."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(path, f"Could not traverse '{path}': {cause}", cause)


class SubtreeCountError(IcounterError):
    """Non-recoverable I/O failure while counting a deferred subtree."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(path, f"Could not count inodes in '{path}': {cause}", cause)


class PathEncodingError(IcounterError):
    """A filesystem name cannot be represented as display text."""

    def __init__(self, path: str):
        super().__init__(path, f"Could not convert {path!r} to a display string.")
