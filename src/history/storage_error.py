"""Any exception that can occur during history storage operations."""


class HistoryStorageError(Exception):
    """Error raised when history can not be loaded or saved."""
