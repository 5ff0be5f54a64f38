"""
Tests for the database error translator
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError, TimeoutError as PoolTimeoutError

from app.core.errors import (
    Conflict,
    DuplicateKey,
    GatewayTimeout,
    InternalError,
    InvalidReference,
    ServiceUnavailable,
    translate_db_error,
)


class DriverError(Exception):
    """Stands in for a DB-API exception carrying a driver error code."""

    def __init__(self, *args, pgcode=None):
        super().__init__(*args)
        self.pgcode = pgcode


def _integrity(orig):
    return IntegrityError("INSERT ...", {}, orig)


def _operational(orig):
    return OperationalError("SELECT 1", {}, orig)


@pytest.mark.parametrize(
    "exc, expected, status",
    [
        (_integrity(DriverError(1062, "Duplicate entry 'a' for key 'email'")), DuplicateKey, 409),
        (_integrity(DriverError("duplicate key value", pgcode="23505")), DuplicateKey, 409),
        (_integrity(DriverError("UNIQUE constraint failed: users.email")), DuplicateKey, 409),
        (_integrity(DriverError(1452, "Cannot add or update a child row")), InvalidReference, 400),
        (_integrity(DriverError("FOREIGN KEY constraint failed")), InvalidReference, 400),
        (_integrity(DriverError("violates foreign key", pgcode="23503")), InvalidReference, 400),
        (_integrity(DriverError("NOT NULL constraint failed: users.name")), Conflict, 409),
        (_operational(DriverError(2003, "Can't connect to MySQL server")), ServiceUnavailable, 503),
        (_operational(DriverError("connection refused")), ServiceUnavailable, 503),
        (_operational(DriverError(1205, "Lock wait timeout exceeded")), GatewayTimeout, 504),
        (PoolTimeoutError("QueuePool limit reached"), GatewayTimeout, 504),
        (_operational(DriverError("something odd happened")), InternalError, 500),
    ],
)
def test_driver_errors_map_onto_taxonomy(exc, expected, status):
    err = translate_db_error(exc)
    assert type(err) is expected
    assert err.status_code == status


def test_row_still_referenced_has_its_own_code():
    err = translate_db_error(_integrity(DriverError(1451, "Cannot delete or update a parent row")))
    assert isinstance(err, InvalidReference)
    assert err.error_code == "REFERENCED_RECORD"


@pytest.mark.parametrize(
    "exc",
    [
        ProgrammingError("SELECT", {}, DriverError(1146, "Table 'x' doesn't exist")),
        OperationalError("SELECT", {}, DriverError("no such table: users")),
        ProgrammingError("SELECT", {}, DriverError("relation does not exist", pgcode="42P01")),
    ],
)
def test_missing_table(exc):
    err = translate_db_error(exc)
    assert isinstance(err, InternalError)
    assert err.error_code == "MISSING_TABLE"
