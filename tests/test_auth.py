import asyncio

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from medschedule import auth
from medschedule.shared.context import UNAUTHENTICATED


def resolve(credentials):
    return asyncio.run(auth.get_caller_context(credentials))


def bearer(token="header.payload.signature"):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_missing_token_is_unauthenticated():
    assert resolve(None) is UNAUTHENTICATED


def test_anonymous_firebase_session(monkeypatch):
    async def fake_verify(token):
        return {"sub": "anon-uid", "firebase": {"sign_in_provider": "anonymous"}}

    monkeypatch.setattr(auth, "verify_firebase_token", fake_verify)

    ctx = resolve(bearer())

    assert ctx.user_id == "anon-uid"
    assert ctx.is_authenticated


def test_user_id_claim_used_without_sub(monkeypatch):
    async def fake_verify(token):
        return {"user_id": "doc-uid", "email": "doc@example.com", "firebase": {"sign_in_provider": "password"}}

    monkeypatch.setattr(auth, "verify_firebase_token", fake_verify)

    ctx = resolve(bearer())

    assert ctx.user_id == "doc-uid"


def test_token_without_subject_rejected(monkeypatch):
    async def fake_verify(token):
        return {"email": "x@example.com"}

    monkeypatch.setattr(auth, "verify_firebase_token", fake_verify)

    with pytest.raises(HTTPException) as exc_info:
        resolve(bearer())
    assert exc_info.value.status_code == 401


def test_malformed_token_rejected(monkeypatch):
    monkeypatch.setattr(auth, "FIREBASE_PROJECT_ID", "medschedule-test")

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(auth.verify_firebase_token("not-a-jwt"))
    assert exc_info.value.status_code == 401
