# server/core/store.py

import hashlib
import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime
from threading import Lock
from sqlalchemy import func, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from core.errors import StorageError
from database import create_session_factory, ensure_sqlite_dir
from models import Base
from models.user import User


logger = logging.getLogger(__name__)

SEED_BATCH_SIZE = 1000


@dataclass(frozen=True)
class SeedResult:
    """
    Outcome of a seed run.
    `error` is set when the insert failed; nothing from that run is kept.
    """
    inserted: int
    error: StorageError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _synthetic_user() -> dict:
    token = secrets.token_hex(16)
    return {
        "id": str(uuid.uuid4()),
        "username": f"user-{uuid.uuid4().hex}@example.com",
        "hashed_password": hashlib.sha256(token.encode()).hexdigest(),
        "created_at": datetime.now(),
    }


class CredentialStore:
    """
    Persists user records and answers credential lookups.
    One instance is built per process and handed to the request handlers.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = create_session_factory(engine)
        self._write_lock = Lock()

    def initialize(self):
        try:
            ensure_sqlite_dir(self.engine)
            Base.metadata.create_all(bind=self.engine)
        except (OSError, SQLAlchemyError) as e:
            raise StorageError(f"Could not initialize database: {e}") from e

    def find_by_credentials(self, username: str, hashed_password: str) -> User | None:
        stmt = (
            select(User)
            .where(User.username == username, User.hashed_password == hashed_password)
            .limit(1)
        )
        try:
            with self._session_factory() as db:
                return db.execute(stmt).scalars().first()
        except SQLAlchemyError as e:
            raise StorageError(f"User lookup failed: {e}") from e

    def count_users(self) -> int:
        try:
            with self._session_factory() as db:
                return db.execute(select(func.count()).select_from(User)).scalar_one()
        except SQLAlchemyError as e:
            raise StorageError(f"User count failed: {e}") from e

    def seed_users(self, count: int) -> SeedResult:
        """
        Inserts `count` synthetic users in a single transaction.
        Every call adds new rows; usernames are random so runs never collide.
        """
        if count < 0:
            raise ValueError("count must not be negative")
        if count == 0:
            return SeedResult(inserted=0)

        with self._write_lock:
            try:
                with self._session_factory() as db, db.begin():
                    for start in range(0, count, SEED_BATCH_SIZE):
                        batch = [_synthetic_user() for _ in range(min(SEED_BATCH_SIZE, count - start))]
                        db.execute(insert(User), batch)
            except SQLAlchemyError as e:
                error = StorageError(f"Seeding users failed: {e}")
                error.__cause__ = e
                return SeedResult(inserted=0, error=error)

        logger.info("Seeded %d users", count)
        return SeedResult(inserted=count)
