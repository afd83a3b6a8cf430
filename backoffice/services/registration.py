"""Customer registration: structural validation, image normalization, persistence."""

import re
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from email_validator import EmailNotValidError, validate_email

from backoffice.auth.security import hash_password
from backoffice.auth.tokens import TokenService
from backoffice.errors import (
    BadDateOfBirth,
    BadIdentityNumber,
    BadRegistrationDate,
    FieldTooLong,
    IncompleteAccount,
    IncompleteIdentity,
    InvalidEmail,
    ValidationError,
    WeakPassword,
)
from backoffice.models.customer import Customer
from backoffice.models.enums import AccountStatus, PrincipalType
from backoffice.repositories.principal_store import PrincipalStore
from backoffice.services.images import (
    DEFAULT_QUALITY,
    ImageUpload,
    ensure_image_content_type,
    normalize_image,
)
from backoffice.utils.logging import get_logger

logger = get_logger(__name__)

PASSWORD_SYMBOLS = "!@#$%^&*"

_PASSWORD_ALLOWED = re.compile(r"[\w!@#$%^&*]{8,}", re.ASCII)
_DATE = re.compile(r"(\d{4})([-/])(\d{2})\2(\d{2})", re.ASCII)
_IDENTITY_NUMBER = re.compile(r"[0-9]{9}|[0-9]{12}")
_LENGTH_LIMITED = ("username", "email", "name", "phone_number", "address")


def is_strong_password(password: str | None) -> bool:
    """At least 8 characters with a digit, upper, lower and a symbol from ``!@#$%^&*``.

    Only word characters and those symbols are accepted.
    """
    if not password or not _PASSWORD_ALLOWED.fullmatch(password):
        return False
    return (
        any(c.isdigit() for c in password)
        and any(c.isupper() for c in password)
        and any(c.islower() for c in password)
        and any(c in PASSWORD_SYMBOLS for c in password)
    )


def parse_document_date(value: str | None) -> date | None:
    """Parse ``YYYY-MM-DD`` or ``YYYY/MM/DD``; ``None`` if malformed or not a real date."""
    if not value:
        return None
    match = _DATE.fullmatch(value.strip())
    if match is None:
        return None
    year, _, month, day = match.groups()
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def is_identity_number(value: str | None) -> bool:
    return bool(value) and _IDENTITY_NUMBER.fullmatch(value) is not None


def is_valid_email(value: str | None) -> bool:
    try:
        validate_email(value or "", check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


@dataclass
class RegistrationForm:
    """Raw registration fields, exactly as submitted."""

    username: str | None = None
    email: str | None = None
    password: str | None = None
    name: str | None = None
    date_of_birth: str | None = None
    phone_number: str | None = None
    address: str | None = None
    identity_number: str | None = None
    registration_date: str | None = None


@dataclass
class RegistrationSubmission:
    form: RegistrationForm
    front_image: ImageUpload | None
    back_image: ImageUpload | None


@dataclass(frozen=True)
class RegistrationCheck:
    name: str
    passes: Callable[[RegistrationSubmission], bool]
    error: type[ValidationError]


def _has_identity(s: RegistrationSubmission) -> bool:
    return all(
        (
            s.form.identity_number,
            s.form.registration_date,
            s.front_image is not None and not s.front_image.is_empty,
            s.back_image is not None and not s.back_image.is_empty,
        )
    )


def _fits_columns(s: RegistrationSubmission) -> bool:
    columns = Customer.__table__.c
    return all(
        len(value) <= columns[field].type.length
        for field in _LENGTH_LIMITED
        if (value := getattr(s.form, field)) is not None
    )


# Evaluated in order; the first failing check decides the error.
REGISTRATION_CHECKS: tuple[RegistrationCheck, ...] = (
    RegistrationCheck(
        "password_strength", lambda s: is_strong_password(s.form.password), WeakPassword
    ),
    RegistrationCheck(
        "date_of_birth",
        lambda s: parse_document_date(s.form.date_of_birth) is not None,
        BadDateOfBirth,
    ),
    RegistrationCheck("identity_complete", _has_identity, IncompleteIdentity),
    RegistrationCheck(
        "identity_number", lambda s: is_identity_number(s.form.identity_number), BadIdentityNumber
    ),
    RegistrationCheck(
        "registration_date",
        lambda s: parse_document_date(s.form.registration_date) is not None,
        BadRegistrationDate,
    ),
    RegistrationCheck(
        "account_complete",
        lambda s: bool(s.form.username and s.form.username.strip())
        and bool(s.form.email and s.form.email.strip()),
        IncompleteAccount,
    ),
    RegistrationCheck("email", lambda s: is_valid_email(s.form.email.strip()), InvalidEmail),
    RegistrationCheck("field_lengths", _fits_columns, FieldTooLong),
)


def validate_registration(submission: RegistrationSubmission) -> None:
    """Raise the error of the first failing :data:`REGISTRATION_CHECKS` entry."""
    for check in REGISTRATION_CHECKS:
        if not check.passes(submission):
            logger.info("Registration rejected by check %s", check.name)
            raise check.error()


class RegistrationService:
    """Register a customer together with their identity document."""

    def __init__(
        self,
        store: PrincipalStore,
        tokens: TokenService,
        image_quality: int = DEFAULT_QUALITY,
        bcrypt_rounds: int | None = None,
    ) -> None:
        self.store = store
        self.tokens = tokens
        self.image_quality = image_quality
        self.bcrypt_rounds = bcrypt_rounds

    async def register(
        self,
        form: RegistrationForm,
        front_image: ImageUpload | None,
        back_image: ImageUpload | None,
    ) -> tuple[object, str]:
        """Validate, persist and log in a new customer.

        Returns the created customer and a freshly issued token.
        """
        for upload in (front_image, back_image):
            if upload is not None and not upload.is_empty:
                ensure_image_content_type(upload.content_type)

        submission = RegistrationSubmission(form, front_image, back_image)
        validate_registration(submission)

        front = normalize_image(front_image.data, quality=self.image_quality)
        back = normalize_image(back_image.data, quality=self.image_quality)

        customer_fields = {
            "username": form.username.strip().lower(),
            "email": form.email.strip().lower(),
            "hashed_password": hash_password(form.password, rounds=self.bcrypt_rounds),
            "name": form.name,
            "date_of_birth": parse_document_date(form.date_of_birth),
            "phone_number": form.phone_number,
            "address": form.address,
            "verify_code": str(uuid.uuid4()),
            "status": AccountStatus.active.value,
        }
        identity_fields = {
            "identity_number": form.identity_number,
            "registration_date": parse_document_date(form.registration_date),
            "front_image": front,
            "back_image": back,
        }

        customer = await self.store.create_customer_with_identity(customer_fields, identity_fields)
        logger.info("Registered customer %s", customer.id)
        return customer, self.tokens.issue(PrincipalType.customer, customer.id)
