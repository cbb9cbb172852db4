# server/api/deps.py

from fastapi import Request
from core.store import CredentialStore


def get_store(request: Request) -> CredentialStore:
    return request.app.state.store


def get_seed_count(request: Request) -> int:
    return request.app.state.seed_count
