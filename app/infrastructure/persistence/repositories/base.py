"""Base repository: session holder and integrity-error classification."""

from typing import Generic, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base


def violated_constraint(exc: IntegrityError, *names: str) -> str | None:
    """Return which of the given constraint names an IntegrityError is about.

    asyncpg exposes constraint_name on the driver error; other drivers
    only mention the name in the message, so the text is checked as well.
    """
    orig = exc.orig
    candidates = [orig, getattr(orig, "__cause__", None)]
    for err in candidates:
        reported = getattr(err, "constraint_name", None)
        if reported in names:
            return reported
    text = str(orig)
    for name in names:
        if name in text:
            return name
    return None


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository holding the request session and the mapped model."""

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model
