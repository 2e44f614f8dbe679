"""
Domain exceptions shared by storage, services and routers
"""


class StorageError(Exception):
    """Raised when a storage backend cannot complete an operation"""


class DuplicateUsernameError(StorageError):
    """Raised when a user insert conflicts with an existing username"""

    def __init__(self, username: str):
        super().__init__(f"Username already exists: {username}")
        self.username = username


class InvalidTransitionError(ValueError):
    """Raised when a pipeline status change is not allowed"""

    def __init__(self, current, target):
        super().__init__(f"Cannot transition from {current} to {target}")
        self.current = current
        self.target = target
