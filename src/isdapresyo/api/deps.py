import logging
from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from isdapresyo.auth.credentials import CredentialChecker
from isdapresyo.auth.tokens import TokenAuthority, TokenRejected
from isdapresyo.config import Settings
from isdapresyo.container import Container
from isdapresyo.domain.enums import AuditEventType
from isdapresyo.domain.errors import AccessDenied
from isdapresyo.domain.models.auth import AdminClaims
from isdapresyo.infra.audit import AuditLog
from isdapresyo.services.fish_price_service import FishPriceService

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must reach require_admin so it is denied uniformly
bearer = HTTPBearer(auto_error=False)


@inject
async def get_settings(settings: Settings = Depends(Provide[Container.settings])) -> Settings:
    return settings


@inject
async def get_fish_price_service(
    service: FishPriceService = Depends(Provide[Container.fish_price_service]),
) -> FishPriceService:
    return service


@inject
async def get_token_authority(
    authority: TokenAuthority = Depends(Provide[Container.token_authority]),
) -> TokenAuthority:
    return authority


@inject
async def get_credential_checker(
    checker: CredentialChecker = Depends(Provide[Container.credential_checker]),
) -> CredentialChecker:
    return checker


@inject
async def get_audit_log(audit: AuditLog = Depends(Provide[Container.audit_log])) -> AuditLog:
    return audit


def client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


async def require_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    authority: TokenAuthority = Depends(get_token_authority),
    audit: AuditLog = Depends(get_audit_log),
) -> AdminClaims:
    """
    Gate admin endpoints on a valid Bearer token.

    Every failure raises AccessDenied, which renders the same 403 body; the
    cause is only written to the audit log.
    """
    ip, path = client_ip(request), request.url.path

    if credentials is None:
        await audit.emit(AuditEventType.AUTH_MISSING, ip=ip, path=path)
        raise AccessDenied("missing token")

    try:
        claims = authority.verify(credentials.credentials)
    except TokenRejected as e:
        if e.role_mismatch:
            await audit.emit(AuditEventType.AUTH_INVALID_ROLE, ip=ip, path=path)
        else:
            await audit.emit(AuditEventType.AUTH_INVALID_TOKEN, ip=ip, path=path, detail=e.reason)
        logger.info("Admin token rejected on %s: %s", path, e.reason)
        raise AccessDenied(e.reason)

    return claims
