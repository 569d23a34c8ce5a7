"""
Result Pattern Implementation
Lets services report success or a coded failure without raising to the caller
"""

from typing import TypeVar, Generic, Optional, Any, Dict
from dataclasses import dataclass

T = TypeVar('T')


@dataclass
class Result(Generic[T]):
    """
    Either a successful value or a failure with an error message and code.

    Examples:
        result = contact_service.get_contact(7)
        if result.is_success:
            payload = contact_service.serialize_contact(result.data)
        elif result.error_code == "NOT_FOUND":
            ...
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> 'Result[T]':
        """
        Create a successful result.

        Args:
            data: The successful result data
            metadata: Optional metadata about the operation
        """
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def failure(cls,
                error: str,
                code: Optional[str] = None,
                metadata: Optional[Dict[str, Any]] = None) -> 'Result[T]':
        """
        Create a failure result.

        Args:
            error: Error message describing the failure
            code: Optional error code for programmatic handling
            metadata: Optional metadata about the failure
        """
        return cls(success=False, error=error, error_code=code, metadata=metadata)

    @property
    def is_success(self) -> bool:
        return self.success

    @property
    def is_failure(self) -> bool:
        return not self.success

    def unwrap(self) -> T:
        """
        Get the data from a successful result.

        Raises:
            ValueError: If called on a failure result
        """
        if self.is_failure:
            raise ValueError(f"Cannot unwrap a failure result: {self.error}")
        return self.data

    def unwrap_or(self, default: T) -> T:
        """Get the data from a successful result or return a default value."""
        return self.data if self.is_success else default

    def __bool__(self) -> bool:
        return self.is_success

    def __repr__(self) -> str:
        if self.is_success:
            return f"Result.success(data={self.data!r})"
        return f"Result.failure(error={self.error!r}, code={self.error_code!r})"


@dataclass
class PagedResult(Result[T]):
    """
    Extended Result for paginated data.

    Includes pagination metadata along with the result data.
    """

    total: Optional[int] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    total_pages: Optional[int] = None

    @classmethod
    def paginated(cls,
                  data: T,
                  total: int,
                  page: int,
                  per_page: int,
                  metadata: Optional[Dict[str, Any]] = None) -> 'PagedResult[T]':
        """
        Create a paginated successful result.

        Args:
            data: The page of data
            total: Total number of items
            page: Current page number
            per_page: Items per page
            metadata: Optional additional metadata
        """
        total_pages = (total + per_page - 1) // per_page if per_page > 0 else 0

        return cls(
            success=True,
            data=data,
            metadata=metadata,
            total=total,
            page=page,
            per_page=per_page,
            total_pages=total_pages
        )
