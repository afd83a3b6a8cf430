"""Admin-only staff management endpoints."""

from fastapi import APIRouter, Depends, Query, status
from fastapi_filter import FilterDepends

from backoffice.auth.dependencies import ADMIN_ROLES, RequireRoles
from backoffice.dependencies import Management
from backoffice.filters.staff import StaffFilter
from backoffice.schemas.auth import StatusChangeRequest
from backoffice.schemas.common import DataResponse
from backoffice.schemas.staff import StaffCreate, StaffListResponse, StaffResponse
from backoffice.utils.audit import audit_logged

router = APIRouter(dependencies=[Depends(RequireRoles(ADMIN_ROLES))])


@router.get("/staffs", response_model=DataResponse[StaffListResponse])
async def list_staffs(
    management: Management,
    filters: StaffFilter = FilterDepends(StaffFilter),
    page: int = Query(1, ge=1),
    size: int = Query(10, ge=1, le=100),
) -> DataResponse[StaffListResponse]:
    """List non-admin staff with optional filtering and pagination."""
    staffs, total = await management.list_staff(filters, page=page, size=size)
    return DataResponse(
        data=StaffListResponse.paginate(
            items=[StaffResponse.model_validate(s) for s in staffs],
            total=total,
            page=page,
            size=size,
        )
    )


@router.post(
    "/staffs",
    response_model=DataResponse[StaffResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(audit_logged("create_staff"))],
)
async def create_staff(body: StaffCreate, management: Management) -> DataResponse[StaffResponse]:
    """Create a staff member. The ``staff`` role is always assigned."""
    staff = await management.create_staff(body.username, body.password, body.name)
    return DataResponse(data=StaffResponse.model_validate(staff))


@router.post(
    "/staffs/status",
    response_model=DataResponse[StaffResponse],
    dependencies=[Depends(audit_logged("update_staff_status"))],
)
async def update_staff_status(
    body: StatusChangeRequest,
    management: Management,
) -> DataResponse[StaffResponse]:
    staff = await management.change_staff_status(body.id, body.status)
    return DataResponse(data=StaffResponse.model_validate(staff))


@router.get("/staffs/{staff_id}", response_model=DataResponse[StaffResponse])
async def get_staff(staff_id: str, management: Management) -> DataResponse[StaffResponse]:
    staff = await management.get_staff(staff_id)
    return DataResponse(data=StaffResponse.model_validate(staff))
