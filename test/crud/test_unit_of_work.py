import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from forum import models
from forum.database import UnitOfWork, unit_of_work
from forum.exceptions import ConflictError, InternalError, NotFoundError


def test_clean_exit_commits(mock_db):
    mock_db.in_transaction.return_value = False

    with unit_of_work(mock_db):
        mock_db.add("row")

    mock_db.begin.assert_called_once()
    mock_db.commit.assert_called_once()
    mock_db.rollback.assert_not_called()


def test_begin_ends_read_transaction_before_writes(mock_db):
    mock_db.in_transaction.return_value = True

    uow = UnitOfWork(mock_db).begin()

    assert uow.active is True
    mock_db.commit.assert_called_once()
    mock_db.begin.assert_called_once()
    assert [c[0] for c in mock_db.method_calls[-2:]] == ["commit", "begin"]


def test_domain_error_rolls_back_and_propagates(mock_db):
    mock_db.in_transaction.return_value = False

    with pytest.raises(NotFoundError):
        with unit_of_work(mock_db):
            raise NotFoundError("gone")

    mock_db.rollback.assert_called_once()
    mock_db.commit.assert_not_called()


def test_integrity_error_on_commit_becomes_conflict(mock_db):
    mock_db.in_transaction.return_value = False
    mock_db.commit.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    with pytest.raises(ConflictError):
        with unit_of_work(mock_db):
            mock_db.add("row")

    mock_db.rollback.assert_called_once()


def test_storage_error_inside_unit_becomes_internal(mock_db):
    mock_db.in_transaction.return_value = False

    with pytest.raises(InternalError):
        with unit_of_work(mock_db):
            raise OperationalError("UPDATE", {}, Exception("database is locked"))

    mock_db.rollback.assert_called_once()
    mock_db.commit.assert_not_called()


def test_explicit_begin_commit_rollback(mock_db):
    mock_db.in_transaction.return_value = False
    uow = UnitOfWork(mock_db)

    uow.begin()
    uow.rollback()
    assert uow.active is False
    mock_db.rollback.assert_called_once()

    uow.begin()
    uow.commit()
    assert uow.active is False
    mock_db.commit.assert_called_once()


def test_writes_get_a_fresh_transaction_after_reads(db):
    db.query(models.User).count()
    read_transaction = db.get_transaction()
    assert read_transaction is not None

    with unit_of_work(db):
        write_transaction = db.get_transaction()
        db.add(models.User(id="u1", username="u1_name"))

    assert write_transaction is not read_transaction
    assert db.query(models.User).count() == 1
