# server/api/auth.py

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from api.deps import get_store
from core.store import CredentialStore


INVALID_CREDENTIALS = "Invalid username or password"


router = APIRouter(prefix="/api/auth")


class CamelModel(BaseModel):
    """JSON bodies use camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginRequest(CamelModel):
    username: str
    hashed_password: str


class LoginResponse(CamelModel):
    success: bool
    user_id: str | None = None
    error_message: str | None = None


@router.get("/health", response_class=PlainTextResponse)
def health():
    return "OK"


@router.post("/get-user-token", response_model=LoginResponse, response_model_exclude_none=True)
def get_user_token(req: LoginRequest, store: CredentialStore = Depends(get_store)):
    """
    Checks the username and password hash against the user table.
    A miss never says which of the two fields was wrong.
    """
    user = store.find_by_credentials(req.username, req.hashed_password)
    if user is None:
        return LoginResponse(success=False, error_message=INVALID_CREDENTIALS)
    return LoginResponse(success=True, user_id=user.id)
