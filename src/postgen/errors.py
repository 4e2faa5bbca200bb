"""Exceptions raised while discovering controllers and writing collections."""


class PostgenError(Exception):
    """Base class for postgen errors."""


class InvalidControllerName(PostgenError):
    """Raised when a controller identifier yields no usable name.

    Either the ``Controller`` token is missing or nothing remains once it is
    removed.
    """

    def __init__(self, identifier: str) -> None:
        super().__init__(
            f"Controller name '{identifier}' must contain 'Controller' plus at least one"
            " other character"
        )
        self.identifier = identifier


class UnknownHttpVerbMarker(PostgenError):
    """Raised when an HTTP method marker has no entry in the verb table."""

    def __init__(self, marker: str) -> None:
        super().__init__(f"No HTTP verb is known for marker '{marker}'")
        self.marker = marker


class SchemaFetchError(PostgenError):
    """Raised when a collection schema cannot be downloaded."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url
