"""Result type returned by the public codec functions"""
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, TypeVar

from ..exceptions import ReldocError

T = TypeVar('T')


@dataclass
class Result(Generic[T]):
    """
    Outcome of an encode or decode call, "error as value".

    The public functions never raise for bad input. They hand back either
    the produced value or a failure message, plus any warnings collected
    while a best-effort decode dropped data.

    Examples:
        result = decode_document(text)

        if result:
            records = result.data
        else:
            print(result.error)

        # Raise instead of branching
        records = result.unwrap()

        # Fall back to an empty collection
        records = result.unwrap_or([])
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_details: dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate invariants after initialization"""
        if self.success and self.data is None:
            raise ValueError("Successful result must have data")
        if not self.success and self.error is None:
            raise ValueError("Failed result must have error")

    def add_warning(self, warning: str) -> 'Result[T]':
        """Append a warning and return self for chaining."""
        self.warnings.append(warning)
        return self

    def unwrap(self) -> T:
        """
        Return the wrapped data.

        Raises:
            ValueError: If result is not successful
        """
        if not self.success:
            raise ValueError(f"Unwrap called on failed result: {self.error}")
        return self.data

    def unwrap_or(self, default: T) -> T:
        """Return the wrapped data, or ``default`` if the call failed."""
        return self.data if self.success else default

    def map(self, func: Callable[[T], Any]) -> 'Result[Any]':
        """
        Apply function to data if successful.

        Warnings are carried over to the new Result.
        """
        if self.success:
            return Result(success=True, data=func(self.data), warnings=self.warnings.copy())

        return Result(
            success=False,
            error=self.error,
            error_details=self.error_details,
            warnings=self.warnings.copy(),
        )

    def is_ok(self) -> bool:
        """Check if result is successful"""
        return self.success

    def is_err(self) -> bool:
        """Check if result is failed"""
        return not self.success

    @classmethod
    def ok(cls, data: T, warnings: Optional[List[str]] = None) -> 'Result[T]':
        """Create successful result."""
        return cls(success=True, data=data, warnings=list(warnings or []))

    @classmethod
    def err(cls, error: str, warnings: Optional[List[str]] = None) -> 'Result[T]':
        """Create failed result."""
        return cls(success=False, error=error, warnings=list(warnings or []))

    @classmethod
    def from_error(cls, exc: ReldocError, warnings: Optional[List[str]] = None) -> 'Result[T]':
        """
        Create failed result from a codec exception.

        The user-facing message becomes ``error``; the structured
        ``to_dict()`` payload is kept in ``error_details`` for logging.
        """
        return cls(
            success=False,
            error=exc.user_message,
            error_details=exc.to_dict(),
            warnings=list(warnings or []),
        )

    def __repr__(self) -> str:
        warnings_str = f", warnings={self.warnings}" if self.warnings else ""
        if self.success:
            return f"Result.ok({self.data!r}{warnings_str})"
        return f"Result.err({self.error!r}{warnings_str})"

    def __bool__(self) -> bool:
        """Allow using Result in boolean context (checks success)"""
        return self.success
