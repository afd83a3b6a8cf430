"""Audit logging for privileged actions."""

from fastapi import Request

from backoffice.auth.dependencies import CurrentPrincipal
from backoffice.utils.logging import get_logger

logger = get_logger("audit")


def audit_logged(action: str):
    """Dependency factory that logs privileged actions.

    Usage::

        @router.post("/staffs", dependencies=[Depends(audit_logged("create_staff"))])
    """

    async def _log(request: Request, principal: CurrentPrincipal) -> None:
        try:
            client_ip = request.client.host if request.client else "unknown"
            request_id = getattr(request.state, "request_id", "n/a")
            logger.info(
                "AUDIT action=%s principal=%s:%s role=%s ip=%s request_id=%s path=%s",
                action,
                principal.kind,
                principal.username,
                principal.role,
                client_ip,
                request_id,
                request.url.path,
            )
        except Exception:
            logger.warning("Failed to write audit log for action=%s", action, exc_info=True)

    return _log
