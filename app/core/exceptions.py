from typing import Optional, Any

class ProfileDropError(Exception):
    """
    Base exception for ProfileDrop.

    Every subclass answers with HTTP 500: the registration, listing and
    download routes report all failures as server errors.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class UploadValidationError(ProfileDropError):
    """
    Raised when a submitted form or file is rejected before anything is written.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)

class StorageError(ProfileDropError):
    """
    Raised when the file store cannot write or read a file.
    """
    def __init__(self, message: str = "File storage error", details: Optional[Any] = None):
        super().__init__(message, code="STORAGE_ERROR", details=details)

class PersistenceError(ProfileDropError):
    """
    Raised when the database is unreachable or rejects a write.
    """
    def __init__(self, message: str = "Database error", details: Optional[Any] = None):
        super().__init__(message, code="PERSISTENCE_ERROR", details=details)

class FileNotFoundInStoreError(ProfileDropError):
    """
    Raised when a requested stored file does not exist.
    """
    def __init__(self, message: str = "File not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", details=details)
