"""
Exceptions raised synchronously by the speech session components.

Failures that happen asynchronously during capture are never raised; they are
delivered as events on the service and controller notification channels.
"""


class SessionError(Exception):
    """Base exception for recognition session errors."""
    pass


class InitializationError(SessionError):
    """The recognition service failed to initialize. Terminal for the attempt."""
    pass


class PermissionCheckError(SessionError):
    """The permission check could not be performed (not a plain denial)."""
    pass


class SettingsStoreError(SessionError):
    """Persisted settings could not be read or written."""
    pass
