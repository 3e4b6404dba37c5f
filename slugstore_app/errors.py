"""
Domain errors raised by the slug service and storage backends.

Routes translate these into JSON bodies of the form {"error": message}.
"""


class SlugStoreError(Exception):
    """Base class for slug store errors"""
    
    message = "Internal Server Error"
    
    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MappingNotFoundError(SlugStoreError):
    message = "URL not found"


class InvalidCursorError(SlugStoreError):
    message = "Invalid cursor"


class SlugAllocationError(SlugStoreError):
    """Raised when max_slug_attempts is set and every candidate was taken"""
    message = "Could not allocate a unique slug"


class ShortenFailedError(SlugStoreError):
    """Catch-all for the bare-host shorten path"""
    message = "Internal Server Error"
