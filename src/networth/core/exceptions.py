"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class DataSourceError(AppError):
    """Raised when the transaction store cannot be read."""

    status_code = 503

    def __init__(self, table: str, reason: str):
        self.table = table
        super().__init__(
            f"Failed to read '{table}' from data source: {reason}",
            code="DATA_SOURCE_ERROR",
        )
