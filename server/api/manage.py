# server/api/manage.py

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from api.deps import get_store, get_seed_count
from core.store import CredentialStore


logger = logging.getLogger(__name__)


# -------------------------------
# Router
# -------------------------------

router = APIRouter(prefix="/api/auth")

SEED_FAILED_MESSAGE = "An error occurred while creating the database"


# -------------------------------
# Database Maintenance Endpoints
# -------------------------------

@router.get("/create-db", response_class=PlainTextResponse)
def create_db(
    store: CredentialStore = Depends(get_store),
    seed_count: int = Depends(get_seed_count),
):
    """
    Fills the user table with synthetic accounts for load testing.
    Failures are logged in full; the caller only sees a generic message.
    """
    result = store.seed_users(seed_count)
    if not result.ok:
        logger.error("Error creating database", exc_info=result.error)
        return PlainTextResponse(SEED_FAILED_MESSAGE, status_code=500)

    return f"Successfully created {result.inserted} users in the database"
