from sqlalchemy.exc import IntegrityError, OperationalError

from src.app.services.persistence_errors import RecordNotFoundError, persistence_error


def test_unique_violation_names_the_field():
    exc = IntegrityError(
        "INSERT INTO applications", {}, Exception("UNIQUE constraint failed: applications.name")
    )

    error = persistence_error(exc)

    assert error.code == "ALREADY_EXISTS"
    assert error.message == "A record with this name already exists"


def test_postgres_unique_violation():
    exc = IntegrityError(
        "INSERT INTO users",
        {},
        Exception('duplicate key value violates unique constraint "users_auth_user_id_key"\n'
                  "DETAIL:  Key (auth_user_id)=(user_1) already exists."),
    )

    assert persistence_error(exc).message == "A record with this auth_user_id already exists"


def test_foreign_key_violation():
    exc = IntegrityError("DELETE FROM applications", {}, Exception("FOREIGN KEY constraint failed"))

    assert persistence_error(exc).code == "HAS_RELATED_DATA"


def test_missing_record():
    error = persistence_error(RecordNotFoundError("User", "user_1"))

    assert error.code == "RECORD_NOT_FOUND"
    assert error.message == "Record not found"
    assert "user_1" in error.reason


def test_timeout():
    error = persistence_error(TimeoutError())

    assert error.code == "DATABASE_ERROR"
    assert error.message == "Database operation timed out"


def test_other_database_failure_hides_details():
    exc = OperationalError("SELECT 1", {}, Exception("database is locked"))

    error = persistence_error(exc)

    assert error.code == "DATABASE_ERROR"
    assert error.message == "Database operation failed"
    assert "locked" in error.reason
