"""Customer-facing endpoints: login, registration and own profile."""

from typing import Annotated

from fastapi import APIRouter, File, Form, Request, UploadFile, status

from backoffice.auth.dependencies import CurrentCustomer
from backoffice.dependencies import Accounts, AppSettings, Registration
from backoffice.errors import UploadTooLarge
from backoffice.models.enums import PrincipalType
from backoffice.schemas.auth import LoginRequest, UpdatePasswordRequest
from backoffice.schemas.common import DataResponse, TokenResponse
from backoffice.schemas.customer import CustomerProfileUpdate, CustomerResponse
from backoffice.services.images import ImageUpload
from backoffice.services.registration import RegistrationForm
from backoffice.utils.rate_limit import LOGIN_LIMIT, limiter

router = APIRouter()

_CHUNK_SIZE = 1024 * 1024


async def read_upload(file: UploadFile | None, max_bytes: int) -> ImageUpload | None:
    """Read an upload into memory, refusing anything above ``max_bytes``."""
    if file is None:
        return None

    data = bytearray()
    while chunk := await file.read(_CHUNK_SIZE):
        data.extend(chunk)
        if len(data) > max_bytes:
            raise UploadTooLarge(f"Uploaded file exceeds {max_bytes} bytes")
    return ImageUpload(content_type=file.content_type, data=bytes(data))


@router.post("/login", response_model=TokenResponse)
@limiter.limit(LOGIN_LIMIT)
async def login(request: Request, body: LoginRequest, accounts: Accounts) -> TokenResponse:
    """Log in with username or email."""
    token = await accounts.login(PrincipalType.customer, body.username, body.password)
    return TokenResponse(token=token)


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(LOGIN_LIMIT)
async def register(
    request: Request,
    registration: Registration,
    settings: AppSettings,
    username: Annotated[str | None, Form()] = None,
    email: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
    name: Annotated[str | None, Form()] = None,
    date_of_birth: Annotated[str | None, Form(alias="dateOfBirth")] = None,
    phone_number: Annotated[str | None, Form(alias="phoneNumber")] = None,
    address: Annotated[str | None, Form()] = None,
    identity_number: Annotated[str | None, Form(alias="identityNumber")] = None,
    registration_date: Annotated[str | None, Form(alias="registrationDate")] = None,
    front_image: Annotated[UploadFile | None, File(alias="frontImage")] = None,
    back_image: Annotated[UploadFile | None, File(alias="backImage")] = None,
) -> TokenResponse:
    """Register a customer with front and back images of an identity document."""
    form = RegistrationForm(
        username=username,
        email=email,
        password=password,
        name=name,
        date_of_birth=date_of_birth,
        phone_number=phone_number,
        address=address,
        identity_number=identity_number,
        registration_date=registration_date,
    )
    _, token = await registration.register(
        form,
        await read_upload(front_image, settings.max_upload_bytes),
        await read_upload(back_image, settings.max_upload_bytes),
    )
    return TokenResponse(token=token)


@router.get("/me", response_model=DataResponse[CustomerResponse])
async def get_me(principal: CurrentCustomer) -> DataResponse[CustomerResponse]:
    """Return the authenticated caller's profile."""
    return DataResponse(data=CustomerResponse.model_validate(principal.account))


@router.put("/me", response_model=DataResponse[CustomerResponse])
async def update_me(
    body: CustomerProfileUpdate,
    principal: CurrentCustomer,
    accounts: Accounts,
) -> DataResponse[CustomerResponse]:
    """Update the caller's name, phone number or address."""
    customer = await accounts.update_profile(principal, body.model_dump(exclude_unset=True))
    return DataResponse(data=CustomerResponse.model_validate(customer))


@router.put("/updatePassword", response_model=TokenResponse)
async def update_password(
    body: UpdatePasswordRequest,
    principal: CurrentCustomer,
    accounts: Accounts,
) -> TokenResponse:
    token = await accounts.update_password(principal, body.current_password, body.new_password)
    return TokenResponse(token=token)
