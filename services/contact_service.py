"""
ContactService - Contact form submissions on top of ContactRepository
Reports every outcome as a Result so routes never handle SQLAlchemy errors
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.exc import (
    SQLAlchemyError, IntegrityError, DataError, OperationalError, InterfaceError
)
from contact_database import Contact
from repositories.contact_repository import ContactRepository
from repositories.base_repository import PaginationParams
from repositories.exceptions import NotFoundError
from services.common.result import Result, PagedResult
from utils.datetime_utils import ensure_utc
from logging_config import get_logger

logger = get_logger(__name__)


class ContactService:
    """Service for storing and managing contact form submissions"""

    MAX_PER_PAGE = 100

    def __init__(self, contact_repository: Optional[ContactRepository] = None):
        """
        Initialize with repository.

        Args:
            contact_repository: ContactRepository for data access
        """
        if not contact_repository:
            raise ValueError("ContactRepository must be provided via dependency injection")
        self.contact_repository = contact_repository

    def submit_contact(self, data: Dict[str, Any]) -> Result[Contact]:
        """
        Store a new contact form submission.

        Missing fields are passed through as NULL and rejected by the database.

        Args:
            data: Dictionary with full_name, email, phone and message

        Returns:
            Result containing the created Contact or error
        """
        if not isinstance(data, dict):
            return Result.failure("Request body must be a JSON object", code="VALIDATION_ERROR")
        type_error = _check_field_types(data)
        if type_error:
            return type_error

        contact = Contact(**{field: data.get(field) for field in Contact.USER_FIELDS})
        try:
            self.contact_repository.create(contact)
        except SQLAlchemyError as e:
            return self._store_failure("create contact", e)

        logger.info("Contact submitted", contact_id=contact.id)
        return Result.success(contact)

    def list_contacts(self, search: Optional[str] = None) -> Result[List[Contact]]:
        """
        List contacts that have not been deleted.

        Args:
            search: Optional text matched against name, email and phone

        Returns:
            Result containing list of contacts
        """
        try:
            if search:
                contacts = self.contact_repository.search(search)
            else:
                contacts = self.contact_repository.find_all()
        except SQLAlchemyError as e:
            return self._store_failure("list contacts", e)
        return Result.success(contacts)

    def list_contacts_paginated(self, page: int = 1, per_page: int = 20) -> Result[List[Contact]]:
        """
        List one page of contacts that have not been deleted.

        Returns:
            PagedResult with the page items and totals
        """
        if page < 1 or per_page < 1:
            return Result.failure("page and per_page must be positive", code="VALIDATION_ERROR")
        per_page = min(per_page, self.MAX_PER_PAGE)

        try:
            paginated = self.contact_repository.get_paginated(
                PaginationParams(page=page, per_page=per_page)
            )
        except SQLAlchemyError as e:
            return self._store_failure("list contacts", e)

        return PagedResult.paginated(
            data=paginated.items,
            total=paginated.total,
            page=paginated.page,
            per_page=paginated.per_page
        )

    def get_contact(self, contact_id: int) -> Result[Contact]:
        """Get a single contact that has not been deleted."""
        try:
            return Result.success(self.contact_repository.find_by_id(contact_id))
        except NotFoundError as e:
            return Result.failure(str(e), code="NOT_FOUND")
        except SQLAlchemyError as e:
            return self._store_failure("get contact", e)

    def update_contact(self, contact_id: int, data: Dict[str, Any]) -> Result[Contact]:
        """
        Update the supplied fields of a contact.

        Args:
            contact_id: ID of the contact
            data: Any subset of full_name, email, phone and message

        Returns:
            Result containing the updated Contact or error
        """
        if not isinstance(data, dict):
            return Result.failure("Request body must be a JSON object", code="VALIDATION_ERROR")
        type_error = _check_field_types(data)
        if type_error:
            return type_error

        try:
            contact = self.contact_repository.find_by_id(contact_id)
            for field in Contact.USER_FIELDS:
                if field in data:
                    setattr(contact, field, data[field])
            contact = self.contact_repository.update(contact)
        except NotFoundError as e:
            return Result.failure(str(e), code="NOT_FOUND")
        except SQLAlchemyError as e:
            return self._store_failure("update contact", e)

        logger.info("Contact updated", contact_id=contact_id)
        return Result.success(contact)

    def delete_contact(self, contact_id: int) -> Result[bool]:
        """
        Soft-delete a contact.

        Deleting a contact that is missing or already deleted fails with NOT_FOUND.
        """
        try:
            deleted = self.contact_repository.delete_by_id(contact_id)
        except SQLAlchemyError as e:
            return self._store_failure("delete contact", e)

        if not deleted:
            return Result.failure(f"Contact with id {contact_id} not found", code="NOT_FOUND")
        logger.info("Contact deleted", contact_id=contact_id)
        return Result.success(True)

    def restore_contact(self, contact_id: int) -> Result[Contact]:
        """Bring a soft-deleted contact back."""
        try:
            contact = self.contact_repository.restore(contact_id)
        except NotFoundError as e:
            return Result.failure(str(e), code="NOT_FOUND")
        except SQLAlchemyError as e:
            return self._store_failure("restore contact", e)

        logger.info("Contact restored", contact_id=contact_id)
        return Result.success(contact)

    def serialize_contact(self, contact: Contact) -> Dict[str, Any]:
        """Convert a contact to its public JSON form. deleted_at is not exposed."""
        return {
            'id': contact.id,
            'full_name': contact.full_name,
            'email': contact.email,
            'phone': contact.phone,
            'message': contact.message,
            'created_at': _isoformat(contact.created_at),
            'updated_at': _isoformat(contact.updated_at),
        }

    def _store_failure(self, action: str, error: SQLAlchemyError) -> Result:
        if isinstance(error, (IntegrityError, DataError)):
            logger.warning(f"Failed to {action}: constraint violation", error=str(error.orig))
            return Result.failure(f"Failed to {action}: {error.orig}", code="CONSTRAINT_VIOLATION")
        if isinstance(error, (OperationalError, InterfaceError)):
            logger.error(f"Failed to {action}: store unavailable", error=str(error))
            return Result.failure(f"Failed to {action}: database unavailable", code="STORE_UNAVAILABLE")
        logger.error(f"Failed to {action}", error=str(error))
        return Result.failure(f"Failed to {action}: {error}", code="REPOSITORY_ERROR")


def _check_field_types(data: Dict[str, Any]) -> Optional[Result]:
    """Fail on contact fields that are neither strings nor null."""
    bad_fields = [
        field for field in Contact.USER_FIELDS
        if data.get(field) is not None and not isinstance(data[field], str)
    ]
    if bad_fields:
        return Result.failure(
            f"Fields must be strings: {', '.join(bad_fields)}", code="VALIDATION_ERROR"
        )
    return None


def _isoformat(value):
    value = ensure_utc(value)
    return value.isoformat() if value else None
