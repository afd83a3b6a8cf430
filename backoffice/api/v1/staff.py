"""Staff endpoints: login, own profile and customer administration."""

from fastapi import APIRouter, Depends, Request

from backoffice.auth.dependencies import STAFF_ROLES, CurrentPrincipal, RequireRoles
from backoffice.dependencies import Accounts, Management
from backoffice.models.enums import PrincipalType
from backoffice.schemas.auth import LoginRequest, StatusChangeRequest, UpdatePasswordRequest
from backoffice.schemas.common import DataResponse, TokenResponse
from backoffice.schemas.customer import CustomerResponse
from backoffice.schemas.staff import StaffProfileUpdate, StaffResponse
from backoffice.utils.audit import audit_logged
from backoffice.utils.rate_limit import LOGIN_LIMIT, limiter

public_router = APIRouter()
router = APIRouter(dependencies=[Depends(RequireRoles(STAFF_ROLES))])


@public_router.post("/login", response_model=TokenResponse)
@limiter.limit(LOGIN_LIMIT)
async def login(request: Request, body: LoginRequest, accounts: Accounts) -> TokenResponse:
    """Log in with a staff username."""
    token = await accounts.login(PrincipalType.staff, body.username, body.password)
    return TokenResponse(token=token)


@router.get("/me", response_model=DataResponse[StaffResponse])
async def get_me(principal: CurrentPrincipal) -> DataResponse[StaffResponse]:
    return DataResponse(data=StaffResponse.model_validate(principal.account))


@router.put("/me", response_model=DataResponse[StaffResponse])
async def update_me(
    body: StaffProfileUpdate,
    principal: CurrentPrincipal,
    accounts: Accounts,
) -> DataResponse[StaffResponse]:
    staff = await accounts.update_profile(principal, body.model_dump(exclude_unset=True))
    return DataResponse(data=StaffResponse.model_validate(staff))


@router.put("/updatePassword", response_model=TokenResponse)
async def update_password(
    body: UpdatePasswordRequest,
    principal: CurrentPrincipal,
    accounts: Accounts,
) -> TokenResponse:
    token = await accounts.update_password(principal, body.current_password, body.new_password)
    return TokenResponse(token=token)


@router.post(
    "/customers/status",
    response_model=DataResponse[CustomerResponse],
    dependencies=[Depends(audit_logged("update_customer_status"))],
)
async def update_customer_status(
    body: StatusChangeRequest,
    management: Management,
) -> DataResponse[CustomerResponse]:
    """Activate, deactivate, block or delete a customer account."""
    customer = await management.change_customer_status(body.id, body.status)
    return DataResponse(data=CustomerResponse.model_validate(customer))


@router.get("/customers/{customer_id}", response_model=DataResponse[CustomerResponse])
async def get_customer(
    customer_id: str, management: Management
) -> DataResponse[CustomerResponse]:
    customer = await management.get_customer(customer_id)
    return DataResponse(data=CustomerResponse.model_validate(customer))
