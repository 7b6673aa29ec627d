# reader_publish/errors.py


class PublishError(Exception):
    """Base error for the publish pipeline; carries the HTTP status it maps to."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(PublishError):
    status_code = 400


class Unauthorized(PublishError):
    status_code = 401


class MethodNotAllowed(PublishError):
    status_code = 405


# Any object store transport/auth/server failure other than "not found"
class StorageError(PublishError):
    pass


# Conditional write lost the race to another writer
class ObjectAlreadyExists(StorageError):
    pass


# Raised inside the notifier only; never reaches the caller
class NotificationError(PublishError):
    pass
