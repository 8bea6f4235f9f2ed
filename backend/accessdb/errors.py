# errors.py
# Error taxonomy shared by the store, the merge engine and the HTTP layer.


class AccessStoreError(Exception):
    """Base class for everything the service maps to an HTTP error."""


class ValidationError(AccessStoreError):
    """Request body is malformed. Nothing has been written."""

    status_code = 400


class PayloadTooLarge(ValidationError):
    status_code = 413


class ReadError(AccessStoreError):
    """A collection file exists but could not be read or parsed."""

    def __init__(self, path, cause=None):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read {getattr(path, 'name', path)}")


class WriteError(AccessStoreError):
    """Writing the temp file or renaming it over the target failed."""

    def __init__(self, path, cause=None):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {getattr(path, 'name', path)}")
