"""Domain error types shared by services and the API layer."""


class KitchenWiseError(Exception):
    """Base class for errors raised by KitchenWise services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(KitchenWiseError):
    """Caller-supplied input violates a precondition."""


class NotFoundError(KitchenWiseError):
    """Referenced record or owner does not exist."""


class ConflictError(KitchenWiseError):
    """A write was based on a stale version of the record."""


class StorageError(KitchenWiseError):
    """The persistence backend failed."""


class RecipeGenerationError(KitchenWiseError):
    """The text or image generation service failed or returned unusable output."""
