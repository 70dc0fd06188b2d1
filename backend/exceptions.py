"""
Custom exception classes for the application.

This module defines domain-specific exceptions that provide better error handling
and clearer error messages throughout the catalog. Field-level form errors are
not exceptions; they are collected as values by the validation package.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details)


class ValidationError(ApplicationError):
    """Raised when a caller passes a value the application cannot interpret"""

    def __init__(self, message: str, invalid_fields: dict | None = None):
        details = {"invalid_fields": invalid_fields} if invalid_fields else {}
        super().__init__(message, details)


class EntityNotFoundError(ApplicationError):
    """Raised when an entity id has no corresponding record"""

    def __init__(self, entity: str, entity_id: str, message: str | None = None):
        details = {"entity": entity, "entity_id": entity_id}
        msg = message or f"{entity.capitalize()} not found"
        super().__init__(msg, details)


class DatabaseError(ApplicationError):
    """Raised when database operations fail"""

    def __init__(self, operation: str, message: str):
        details = {"operation": operation}
        super().__init__(message, details)


class DatabaseConnectionError(DatabaseError):
    """Raised when the datastore cannot be reached at startup"""

    def __init__(self, url: str, message: str | None = None):
        msg = message or f"Failed to connect to database at {url}"
        super().__init__("connect", msg)
        self.details["url"] = url
