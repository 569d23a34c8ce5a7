"""
Repository Layer - Data Access Abstraction
Implements the Repository Pattern for database isolation
"""

from .base_repository import (
    BaseRepository,
    PaginationParams,
    PaginatedResult,
    SortOrder
)
from .exceptions import RepositoryError, NotFoundError
from .contact_repository import ContactRepository

__all__ = [
    'BaseRepository',
    'PaginationParams',
    'PaginatedResult',
    'SortOrder',
    'RepositoryError',
    'NotFoundError',
    'ContactRepository'
]
