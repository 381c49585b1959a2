from typing import Annotated

from fastapi import APIRouter, Depends, Request

from isdapresyo.api.deps import client_ip, get_audit_log, get_credential_checker, get_token_authority
from isdapresyo.api.schemas.admin import LoginResponse
from isdapresyo.api.schemas.errors import MessageResponse, ValidationErrorResponse
from isdapresyo.auth.credentials import CredentialChecker, LoginRejected
from isdapresyo.auth.tokens import TokenAuthority
from isdapresyo.domain.errors import AccessDenied
from isdapresyo.infra.audit import AuditLog
from isdapresyo.validation import LoginInput

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ValidationErrorResponse}, 403: {"model": MessageResponse}},
)
async def login(
    body: LoginInput,
    request: Request,
    checker: Annotated[CredentialChecker, Depends(get_credential_checker)],
    authority: Annotated[TokenAuthority, Depends(get_token_authority)],
    audit: Annotated[AuditLog, Depends(get_audit_log)],
) -> LoginResponse:
    """Exchange admin credentials for a session token. Any failure is a plain 403."""
    try:
        identity = await checker.authenticate(body.username, body.password)
    except LoginRejected as e:
        await audit.emit(e.event, ip=client_ip(request), path=request.url.path, detail=e.detail)
        raise AccessDenied(e.detail)

    token = authority.issue(subject=identity.subject, username=identity.username, demo=identity.demo)
    return LoginResponse(
        token=token,
        username=identity.username,
        demo_mode=True if identity.demo else None,
    )
