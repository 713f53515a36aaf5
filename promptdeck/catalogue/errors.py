from __future__ import annotations


class CatalogueError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.kind = "catalogue_error"


class CatalogueValidationError(CatalogueError):
    """Raised when a raw catalogue document does not have the expected shape."""

    NOT_AN_OBJECT = "not_an_object"
    INVALID_CATEGORY = "invalid_category"
    INVALID_TASK = "invalid_task"

    def __init__(
        self,
        kind: str,
        message: str,
        *,
        category: str | None = None,
        task: str | None = None,
    ):
        super().__init__(message, status_code=400)
        self.kind = kind
        self.category = category
        self.task = task


class SelectionError(CatalogueError):
    NOT_FOUND = "not_found"
    NONE_SELECTED = "none_selected"

    def __init__(
        self,
        kind: str,
        message: str,
        *,
        category: str | None = None,
        task: str | None = None,
    ):
        super().__init__(message, status_code=404 if kind == self.NOT_FOUND else 409)
        self.kind = kind
        self.category = category
        self.task = task


class CatalogueNotLoadedError(CatalogueError):
    def __init__(self, message: str = "No catalogue has been loaded yet."):
        super().__init__(message, status_code=503)
        self.kind = "not_loaded"


class CatalogueUnavailableError(CatalogueError):
    def __init__(self, message: str = "Catalogue source is unavailable."):
        super().__init__(message, status_code=503)
        self.kind = "unavailable"
