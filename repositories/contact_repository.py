"""
ContactRepository - Data access layer for Contact entities
Isolates all database queries related to contact form submissions
"""

from typing import List, Optional
from sqlalchemy import or_, desc
from repositories.base_repository import BaseRepository
from contact_database import Contact
import logging

logger = logging.getLogger(__name__)


class ContactRepository(BaseRepository[Contact]):
    """Repository for Contact data access"""

    DEFAULT_SEARCH_FIELDS = ('full_name', 'email', 'phone')

    def __init__(self, session):
        """Initialize repository with database session"""
        super().__init__(session, Contact)

    def search(self, query: str, fields: Optional[List[str]] = None,
               limit: Optional[int] = None) -> List[Contact]:
        """
        Search active contacts by text query across multiple fields.

        Args:
            query: Search query string
            fields: Specific fields to search (default: name, email, phone)
            limit: Maximum number of results to return

        Returns:
            List of matching contacts, ordered by id
        """
        if not query:
            return []

        search_fields = fields or self.DEFAULT_SEARCH_FIELDS

        conditions = []
        for field in search_fields:
            if hasattr(Contact, field):
                conditions.append(getattr(Contact, field).ilike(f'%{query}%'))

        if not conditions:
            return []

        query_obj = self._active_query().filter(or_(*conditions)).order_by(Contact.id)
        if limit:
            query_obj = query_obj.limit(limit)

        return self._run(query_obj.all, "searching Contact")

    def find_by_email(self, email: str) -> List[Contact]:
        """
        Find active submissions sent from an email address, newest first.

        Args:
            email: Email to search for

        Returns:
            List of contacts
        """
        query = self._active_query()\
            .filter(Contact.email == email)\
            .order_by(desc(Contact.created_at), desc(Contact.id))
        return self._run(query.all, "finding Contact by email")
