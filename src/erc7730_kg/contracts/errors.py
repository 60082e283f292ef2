from __future__ import annotations


class KgError(Exception):
    """Base class for fatal pipeline errors."""


class ValidationFailure(KgError):
    """A required input is missing or malformed before a stage runs."""

    def __init__(self, message: str, *, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = missing or []


class GeneratorFailure(KgError):
    """The descriptor generator could not be started or exited non-zero."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class PublishFailure(KgError):
    """A publication step failed. Earlier steps are not rolled back."""

    def __init__(self, message: str, *, step: str) -> None:
        super().__init__(f"{step}: {message}")
        self.step = step
