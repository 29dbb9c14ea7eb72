"""Classification of database integrity errors."""

from sqlalchemy.exc import IntegrityError


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when the error comes from a UNIQUE constraint (SQLite or PostgreSQL).

    NOT NULL, foreign key and check violations return False and should be
    re-raised by callers.
    """
    orig = str(exc.orig).lower() if exc.orig else ""
    return "unique" in orig or "duplicate" in orig
