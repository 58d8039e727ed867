"""Integration tests for ``DjangoUnitOfWork`` against the test database."""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import IntegrityError, OperationalError, transaction

from modules.books.models import BookModel
from modules.core.unit_of_work.django_unit_of_work import DjangoUnitOfWork

pytestmark = pytest.mark.integration


class TestSaveChanges:
    def test_add_is_staged_until_save(self, new_book):
        uow = DjangoUnitOfWork()
        book = new_book()

        uow.books.add(book)
        assert not BookModel.objects.filter(id=book.id).exists()

        assert uow.save_changes() == 1
        assert BookModel.objects.filter(id=book.id).exists()
        uow.close()

    def test_save_with_nothing_staged_returns_zero(self):
        with DjangoUnitOfWork() as uow:
            assert uow.save_changes() == 0

    def test_update_persists_latest_state(self, book):
        with DjangoUnitOfWork() as uow:
            loaded = uow.books.get_by_id(book.id)
            loaded.update_price(Decimal("5.00"))
            uow.books.update(loaded)
            loaded.update_stock(0)
            uow.save_changes()

        row = BookModel.objects.get(id=book.id)
        assert row.price == Decimal("5.00")
        assert row.stock_quantity == 0
        assert row.status == "OutOfStock"

    def test_add_then_delete_before_save_writes_nothing(self, new_book):
        book = new_book()
        with DjangoUnitOfWork() as uow:
            uow.books.add(book)
            uow.books.delete(book.id)
            assert uow.save_changes() == 0
        assert not BookModel.objects.filter(id=book.id).exists()

    def test_failed_flush_propagates_database_error(self, book, new_book):
        duplicate = new_book(isbn=book.isbn)
        with DjangoUnitOfWork() as uow:
            uow.books.add(duplicate)
            with pytest.raises(IntegrityError):
                uow.save_changes()
        assert BookModel.objects.filter(isbn=book.isbn).count() == 1


class TestIdentityMap:
    def test_same_instance_per_unit_of_work(self, book):
        with DjangoUnitOfWork() as uow:
            assert uow.books.get_by_id(book.id) is uow.books.get_by_id(str(book.id))

    def test_separate_units_of_work_load_separately(self, book):
        with DjangoUnitOfWork() as first, DjangoUnitOfWork() as second:
            assert first.books.get_by_id(book.id) is not second.books.get_by_id(book.id)

    def test_staged_delete_hides_entity(self, book):
        with DjangoUnitOfWork() as uow:
            uow.books.delete(book.id)
            assert uow.books.get_by_id(book.id) is None

    @pytest.mark.parametrize("bad_id", ["not-a-uuid", "", None])
    def test_malformed_id_returns_none(self, bad_id):
        with DjangoUnitOfWork() as uow:
            assert uow.books.get_by_id(bad_id) is None


class TestTransactions:
    def test_begin_is_idempotent(self):
        uow = DjangoUnitOfWork()
        uow.begin_transaction()
        uow.begin_transaction()
        assert uow.has_active_transaction
        uow.commit_transaction()
        assert not uow.has_active_transaction
        uow.close()

    def test_commit_persists(self, new_book):
        book = new_book()
        uow = DjangoUnitOfWork()
        uow.begin_transaction()
        uow.books.add(book)
        uow.save_changes()
        uow.commit_transaction()
        uow.close()
        assert BookModel.objects.filter(id=book.id).exists()

    def test_rollback_discards_saved_changes(self, new_book):
        book = new_book()
        uow = DjangoUnitOfWork()
        uow.begin_transaction()
        uow.books.add(book)
        uow.save_changes()
        assert BookModel.objects.filter(id=book.id).exists()

        uow.rollback_transaction()

        assert not uow.has_active_transaction
        assert not BookModel.objects.filter(id=book.id).exists()
        uow.close()

    def test_failed_commit_rolls_back_and_reraises(self, new_book, monkeypatch):
        book = new_book()
        uow = DjangoUnitOfWork()
        uow.begin_transaction()
        uow.books.add(book)
        uow.save_changes()

        error = OperationalError("could not commit")
        original_exit = transaction.Atomic.__exit__

        def failing_exit(atomic, exc_type, exc_value, traceback):
            original_exit(atomic, type(error), error, None)
            raise error

        monkeypatch.setattr(transaction.Atomic, "__exit__", failing_exit)
        with pytest.raises(OperationalError) as excinfo:
            uow.commit_transaction()
        monkeypatch.undo()

        assert excinfo.value is error
        assert not uow.has_active_transaction
        assert not BookModel.objects.filter(id=book.id).exists()
        assert uow.books.get_by_id(book.id) is None
        uow.close()

    def test_rollback_without_transaction_is_noop(self):
        uow = DjangoUnitOfWork()
        uow.rollback_transaction()
        assert not uow.has_active_transaction

    def test_close_rolls_back_open_transaction(self, new_book):
        book = new_book()
        with DjangoUnitOfWork() as uow:
            uow.begin_transaction()
            uow.books.add(book)
            uow.save_changes()
        assert not BookModel.objects.filter(id=book.id).exists()

    def test_rollback_drops_tracked_entities(self, book):
        uow = DjangoUnitOfWork()
        uow.begin_transaction()
        loaded = uow.books.get_by_id(book.id)
        loaded.update_stock(0)
        uow.rollback_transaction()

        reloaded = uow.books.get_by_id(book.id)
        assert reloaded is not loaded
        assert reloaded.stock_quantity == 10
        uow.close()
