from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from stampverify.core.modules.idena.models import IdentityAge, IdentityStake, IdentityState
from stampverify.core.modules.session.models import SessionView
from stampverify.web.deps import AppDep, SessionTokenDep
from stampverify.web.openapi import ErrorResponse

router = APIRouter(tags=["session"])

QUERY_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "Signature challenge not passed"},
    404: {"model": ErrorResponse, "description": "Session not found or expired"},
    502: {"model": ErrorResponse, "description": "Idena API returned an unexpected status"},
}


class StartSignInRequest(BaseModel):
    """Request to begin the signature challenge."""

    token: str = Field(..., min_length=1, description="Session token from /session/init")
    address: str = Field(..., min_length=1, description="Identity address claimed by the client")


class StartSignInResponse(BaseModel):
    nonce: str | None = Field(None, description="Nonce to sign, null if sign-in was already started for this session")


class AuthenticateRequest(BaseModel):
    """Signature over the issued nonce."""

    token: str = Field(..., min_length=1, description="Session token from /session/init")
    signature: str = Field(..., min_length=1, description="Signature of the nonce made with the address key")


class AuthenticateResponse(BaseModel):
    ok: bool | None = Field(
        None, description="Whether the signature matched; null if sign-in was not started or is already authenticated"
    )


@router.post(
    "/session/init",
    summary="Create sign-in session",
    description="Create a short-lived session. It expires five minutes after creation regardless of progress.",
    operation_id="initSession",
)
async def init_session(app: AppDep) -> SessionView:
    return SessionView(token=await app.init_session())


@router.post(
    "/session/start",
    summary="Start signature challenge",
    description="Bind an address to the session and receive the nonce to sign. Only the first call per session issues a nonce.",
    operation_id="startSignIn",
    responses={404: {"model": ErrorResponse, "description": "Session not found or expired"}},
)
async def start_sign_in(start_data: StartSignInRequest, app: AppDep) -> StartSignInResponse:
    outcome = await app.start_sign_in(start_data.token, start_data.address)
    return StartSignInResponse(nonce=outcome.nonce)


@router.post(
    "/session/authenticate",
    summary="Submit nonce signature",
    description="Verify that the nonce was signed by the bound address. A session accepts at most one valid signature.",
    operation_id="authenticate",
    responses={404: {"model": ErrorResponse, "description": "Session not found or expired"}},
)
async def authenticate(auth_data: AuthenticateRequest, app: AppDep) -> AuthenticateResponse:
    outcome = await app.authenticate(auth_data.token, auth_data.signature)
    return AuthenticateResponse(ok=outcome.ok)


@router.get(
    "/session/identity",
    summary="Get identity state",
    operation_id="getIdentityState",
    responses=QUERY_RESPONSES,
)
async def get_identity_state(app: AppDep, token: SessionTokenDep) -> IdentityState:
    return await app.get_identity_state(token)


@router.get(
    "/session/age",
    summary="Get identity age",
    operation_id="getIdentityAge",
    responses=QUERY_RESPONSES,
)
async def get_identity_age(app: AppDep, token: SessionTokenDep) -> IdentityAge:
    return await app.get_identity_age(token)


@router.get(
    "/session/stake",
    summary="Get identity stake",
    operation_id="getIdentityStake",
    responses=QUERY_RESPONSES,
)
async def get_identity_stake(app: AppDep, token: SessionTokenDep) -> IdentityStake:
    return await app.get_identity_stake(token)
