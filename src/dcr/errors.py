"""Custom exception types for dcr."""

from __future__ import annotations


class DcrError(Exception):
    """Base class for all dcr errors."""


class UsageError(ValueError, DcrError):
    """Command usage or user-input errors."""


class ComposeFileError(DcrError):
    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid compose file '{path}': {reason}")


class GroupFileError(DcrError):
    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid group file '{path}': {reason}")


class FileLookupError(DcrError):
    def __init__(self, file_name: str, last_dir: object) -> None:
        self.file_name = file_name
        super().__init__(
            f"Could not find file '{file_name}', last checked dir '{last_dir}'."
        )


class ProjectNotFoundError(DcrError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Project '{name}' not found. Run dcr inside the project once, or use 'dcr --list'."
        )


class ComposeToolNotFoundError(DcrError):
    def __init__(self) -> None:
        super().__init__("Neither 'docker' nor 'docker-compose' was found on PATH.")


class ComposeCommandError(DcrError):
    def __init__(self, returncode: int) -> None:
        self.returncode = returncode
        super().__init__(f"Compose command exited with status {returncode}.")
