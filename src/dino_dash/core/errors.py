"""
errors.py
---------
Exception types raised across the score layer.

Validation rejections (e.g. a score below the save threshold) are not errors;
they are reported through boolean return values.
"""


class DinoDashError(Exception):
    """Base class for all project errors."""


class StorageError(DinoDashError):
    """
    A durable write or delete failed.

    Attributes:
        operation: "write", "delete" or "serialize"
        keys: Storage keys the failure applies to
    """

    def __init__(self, operation, keys, message=None):
        self.operation = operation
        self.keys = tuple(keys)
        if message is None:
            message = f"Failed to {operation} {', '.join(self.keys)}"
        super().__init__(message)
