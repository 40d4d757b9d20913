"""Core exceptions for taskdag operations."""


class TaskDagError(Exception):
    """Base exception for all taskdag errors."""

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(TaskDagError):
    """Raised when input validation fails."""


class DependencyCycleError(TaskDagError):
    """Raised when an operation requiring a DAG is handed a cyclic task set."""

    def __init__(self, cycle: list[str]) -> None:
        path = " -> ".join(cycle)
        super().__init__(
            f"Circular dependency detected: {path}",
            details={"cycle": list(cycle)},
        )
        self.cycle = list(cycle)
