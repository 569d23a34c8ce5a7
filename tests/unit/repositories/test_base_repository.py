"""
Unit tests for BaseRepository
Exercises the shared soft-delete logic through ContactRepository with a mocked session
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, OperationalError
from repositories.base_repository import (
    PaginationParams,
    PaginatedResult,
    SortOrder
)
from repositories.contact_repository import ContactRepository
from repositories.exceptions import NotFoundError
from contact_database import Contact


def make_contact(**kwargs):
    defaults = {
        'id': 1,
        'full_name': 'Ann Lee',
        'email': 'ann@example.com',
        'phone': '555-0100',
        'message': 'Hi'
    }
    defaults.update(kwargs)
    return Contact(**defaults)


class TestPaginationTypes:
    """Pagination value objects"""

    def test_pagination_params_offset_and_limit(self):
        params = PaginationParams(page=3, per_page=10)

        assert params.offset == 20
        assert params.limit == 10

    def test_paginated_result_pages(self):
        result = PaginatedResult(items=[], total=45, page=2, per_page=20)

        assert result.pages == 3
        assert result.has_prev is True
        assert result.has_next is True

    def test_paginated_result_last_page(self):
        result = PaginatedResult(items=[], total=40, page=2, per_page=20)

        assert result.has_next is False

    def test_paginated_result_zero_per_page(self):
        result = PaginatedResult(items=[], total=5, page=1, per_page=0)

        assert result.pages == 0


class TestBaseRepository:
    """Test suite for the soft-delete aware base repository"""

    @pytest.fixture
    def mock_session(self):
        """Create mock database session"""
        return MagicMock(spec=Session)

    @pytest.fixture
    def mock_query(self, mock_session):
        """Query mock whose chaining methods return itself"""
        query = MagicMock()
        query.filter.return_value = query
        query.order_by.return_value = query
        query.offset.return_value = query
        query.limit.return_value = query
        mock_session.query.return_value = query
        return query

    @pytest.fixture
    def repository(self, mock_session):
        return ContactRepository(mock_session)

    # CREATE

    def test_create_adds_and_commits(self, repository, mock_session):
        contact = make_contact(id=None)

        result = repository.create(contact)

        assert result is contact
        mock_session.add.assert_called_once_with(contact)
        mock_session.commit.assert_called_once()

    def test_create_stamps_created_and_updated_with_same_instant(self, repository):
        contact = repository.create(make_contact(id=None))

        assert contact.created_at is not None
        assert contact.updated_at == contact.created_at

    def test_create_keeps_given_created_at(self, repository):
        stamp = datetime(2025, 6, 1, tzinfo=timezone.utc)

        contact = repository.create(make_contact(id=None, created_at=stamp))

        assert contact.created_at == stamp
        assert contact.updated_at == stamp

    def test_create_rolls_back_and_reraises(self, repository, mock_session):
        mock_session.commit.side_effect = IntegrityError(
            "INSERT", {}, Exception("NOT NULL constraint failed")
        )

        with pytest.raises(IntegrityError):
            repository.create(make_contact(id=None, full_name=None))

        mock_session.rollback.assert_called_once()

    # READ

    def test_find_all_filters_out_deleted_rows(self, repository, mock_session, mock_query):
        contacts = [make_contact(id=1), make_contact(id=2)]
        mock_query.all.return_value = contacts

        result = repository.find_all()

        assert result == contacts
        mock_session.query.assert_called_once_with(Contact)
        predicate = mock_query.filter.call_args_list[0][0][0]
        assert str(predicate) == "contact_messages.deleted_at IS NULL"
        mock_query.order_by.assert_called_once()

    def test_find_all_returns_empty_list(self, repository, mock_query):
        mock_query.all.return_value = []

        assert repository.find_all() == []

    def test_find_all_propagates_store_errors(self, repository, mock_query):
        mock_query.all.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

        with pytest.raises(OperationalError):
            repository.find_all()

    def test_find_all_ignores_unknown_order_field(self, repository, mock_query):
        mock_query.all.return_value = []

        repository.find_all(order_by='not_a_column', order=SortOrder.DESC)

        mock_query.order_by.assert_not_called()

    def test_find_by_id_found(self, repository, mock_query):
        contact = make_contact()
        mock_query.one_or_none.return_value = contact

        assert repository.find_by_id(1) is contact
        assert mock_query.filter.call_count == 2

    def test_find_by_id_not_found(self, repository, mock_query):
        mock_query.one_or_none.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            repository.find_by_id(99)

        assert exc_info.value.entity_id == 99
        assert exc_info.value.model_name == 'Contact'

    def test_find_by_id_unscoped_uses_session_get(self, repository, mock_session):
        contact = make_contact(deleted_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
        mock_session.get.return_value = contact

        result = repository.find_by_id_unscoped(1)

        assert result is contact
        mock_session.get.assert_called_once_with(Contact, 1)

    def test_find_deleted_filters_on_non_null(self, repository, mock_query):
        mock_query.all.return_value = []

        repository.find_deleted()

        predicate = mock_query.filter.call_args[0][0]
        assert str(predicate) == "contact_messages.deleted_at IS NOT NULL"

    def test_get_paginated(self, repository, mock_query):
        contacts = [make_contact(id=3), make_contact(id=4)]
        mock_query.count.return_value = 10
        mock_query.all.return_value = contacts

        result = repository.get_paginated(PaginationParams(page=2, per_page=2))

        assert result.items == contacts
        assert result.total == 10
        assert result.pages == 5
        mock_query.offset.assert_called_once_with(2)
        mock_query.limit.assert_called_once_with(2)

    def test_count(self, repository, mock_query):
        mock_query.count.return_value = 7

        assert repository.count() == 7

    # UPDATE

    def test_update_stamps_updated_at_and_commits(self, repository, mock_session, mock_query):
        contact = make_contact(updated_at=None)
        mock_query.one_or_none.return_value = contact

        result = repository.update(contact)

        assert result is contact
        assert contact.updated_at is not None
        mock_session.commit.assert_called_once()

    def test_update_copies_fields_from_detached_copy(self, repository, mock_query):
        current = make_contact(message='Old')
        mock_query.one_or_none.return_value = current
        incoming = make_contact(message='New', full_name='Ann B. Lee')

        result = repository.update(incoming)

        assert result is current
        assert current.message == 'New'
        assert current.full_name == 'Ann B. Lee'
        assert incoming.updated_at == current.updated_at

    def test_update_missing_rolls_back_and_raises(self, repository, mock_session, mock_query):
        mock_query.one_or_none.return_value = None

        with pytest.raises(NotFoundError):
            repository.update(make_contact(id=42))

        mock_session.rollback.assert_called_once()
        mock_session.commit.assert_not_called()

    def test_restore_clears_deleted_at(self, repository, mock_session):
        contact = make_contact(deleted_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
        mock_session.get.return_value = contact

        result = repository.restore(1)

        assert result.deleted_at is None
        mock_session.commit.assert_called_once()

    def test_restore_active_contact_is_noop(self, repository, mock_session):
        mock_session.get.return_value = make_contact()

        repository.restore(1)

        mock_session.commit.assert_not_called()

    def test_restore_missing_raises(self, repository, mock_session):
        mock_session.get.return_value = None

        with pytest.raises(NotFoundError):
            repository.restore(5)

    # DELETE

    def test_delete_sets_deleted_at(self, repository, mock_session, mock_query):
        contact = make_contact()
        mock_query.one_or_none.return_value = contact

        assert repository.delete(contact) is True

        assert contact.deleted_at is not None
        mock_session.commit.assert_called_once()
        mock_session.delete.assert_not_called()

    def test_delete_already_deleted_is_noop(self, repository, mock_session, mock_query):
        mock_query.one_or_none.return_value = None

        assert repository.delete(make_contact()) is False

        mock_session.commit.assert_not_called()

    def test_delete_rolls_back_on_commit_error(self, repository, mock_session, mock_query):
        mock_query.one_or_none.return_value = make_contact()
        mock_session.commit.side_effect = OperationalError("UPDATE", {}, Exception("server closed"))

        with pytest.raises(OperationalError):
            repository.delete(make_contact())

        mock_session.rollback.assert_called_once()

    def test_delete_by_id_missing(self, repository, mock_query):
        mock_query.one_or_none.return_value = None

        assert repository.delete_by_id(3) is False
