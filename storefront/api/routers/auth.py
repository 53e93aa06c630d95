"""
API: Routes d'authentification (signup, login, verify)
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Header
from pydantic import BaseModel

from ...auth import EmailAddress
from ..container import Container
from ..dependencies import get_container


router = APIRouter(tags=["auth"])


class CredentialsRequest(BaseModel):
    email: str
    password: str


class VerifyRequest(BaseModel):
    # Valeur brute: un token mal typé est rejeté en 401 par VerifyTokenUseCase
    token: Any = None


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, value = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return value.strip() or None


@router.post("/signup", status_code=201)
async def signup(body: CredentialsRequest, container: Container = Depends(get_container)):
    await container.signup.execute(body.email, body.password)
    return {"email": EmailAddress.parse(body.email).value}


@router.post("/login")
async def login(body: CredentialsRequest, container: Container = Depends(get_container)):
    token = await container.login.execute(body.email, body.password)
    return {"token": token}


@router.post("/verify")
async def verify(
    body: Optional[VerifyRequest] = None,
    authorization: Optional[str] = Header(None),
    container: Container = Depends(get_container),
):
    # Header prioritaire sur le corps
    token = _bearer_token(authorization) or (body.token if body else None)
    session = container.verify_token.execute(token)
    return {
        "email": session.subject,
        "issuedAt": session.issued_at.isoformat(),
        "expiresAt": session.expires_at.isoformat(),
    }
