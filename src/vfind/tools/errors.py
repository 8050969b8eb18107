"""
Exceptions raised inside the find engine.

Every exception here carries the exact diagnostic line that ends up on standard
error; the command boundary turns them into an exit code of 1.
"""


class FindError(Exception):
    """Base class for errors that abort a find invocation."""

    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_stderr(self) -> str:
        return f"find: {self.message}\n"


class FindParseError(FindError):
    """Raised when the argument list cannot be parsed into an expression."""

    def __init__(self, message: str, token: str = ""):
        super().__init__(message)
        self.token = token


class SearchPathError(FindError):
    """Raised when the search root does not exist."""

    def __init__(self, search_path: str):
        super().__init__(f"{search_path}: No such file or directory")
        self.search_path = search_path


class ExecUnavailableError(FindError):
    """Raised when ``-exec`` is requested without a command executor."""

    def __init__(self):
        super().__init__("-exec not supported in this context")
