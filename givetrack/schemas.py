"""Request/response schemas (pydantic) for the operation routes."""

from datetime import datetime
from typing import Annotated, Any, Literal, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    AfterValidator,
    HttpUrl,
    TypeAdapter,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from givetrack.utils.errors import ValidationError

PaymentStatus = Literal["pending", "confirmed", "failed"]

_http_url = TypeAdapter(HttpUrl)


def _check_url(v: str | None) -> str | None:
    # validate, but hand back what the caller sent (HttpUrl would normalise it)
    if v is not None:
        try:
            _http_url.validate_python(v)
        except PydanticValidationError:
            raise ValueError("must be a valid URL") from None
    return v


def _whole_cents(v: float) -> float:
    # stored as numeric(15,2): anything that rounds to 0.00 is not a positive amount
    if v < 0.005:
        raise ValueError("must be at least 0.01")
    return v


Amount = Annotated[
    float,
    Field(gt=0, le=9_999_999_999_999.99, allow_inf_nan=False),
    AfterValidator(_whole_cents),
]


def _not_null(v: Any) -> Any:
    if v is None:
        raise ValueError("may be omitted but not null")
    return v


# ----------- inbound ------------
class OrganizationCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    logo_url: str | None = None

    @field_validator("logo_url")
    @classmethod
    def check_logo_url(cls, v):
        return _check_url(v)


class OrganizationUpdateRequest(BaseModel):
    id: int
    name: str | None = Field(None, min_length=1)
    logo_url: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def reject_null(cls, v):
        return _not_null(v)

    @field_validator("logo_url")
    @classmethod
    def check_logo_url(cls, v):
        return _check_url(v)


class IdRequest(BaseModel):
    id: int


class CampaignCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    target_amount: Amount
    organization_id: int
    is_active: bool = True


class CampaignUpdateRequest(BaseModel):
    id: int
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    target_amount: Amount | None = None
    organization_id: int | None = None
    is_active: bool | None = None

    @field_validator("name", "target_amount", "organization_id", "is_active", mode="before")
    @classmethod
    def reject_null(cls, v):
        return _not_null(v)


class DonationCreateRequest(BaseModel):
    campaign_id: int
    donor_name: str = Field(..., min_length=1)
    donor_email: EmailStr | None = None
    donor_phone: str | None = None
    amount: Amount
    message: str | None = None


class DonationUpdateRequest(BaseModel):
    id: int
    payment_status: PaymentStatus | None = None
    payment_proof_url: str | None = None

    @field_validator("payment_status", mode="before")
    @classmethod
    def reject_null(cls, v):
        return _not_null(v)

    @field_validator("payment_proof_url")
    @classmethod
    def check_proof_url(cls, v):
        return _check_url(v)


class LatestDonorsQuery(BaseModel):
    campaign_id: int
    limit: int = Field(5, ge=0)


class SearchDonorsQuery(BaseModel):
    query: str = Field(..., min_length=1)
    campaign_id: int | None = None


# ----------- outbound -----------
class OrganizationModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    logo_url: str | None
    created_at: datetime


class CampaignModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    target_amount: float
    current_amount: float
    organization_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CampaignWithStatsModel(CampaignModel):
    organization_name: str
    total_donors: int
    progress_percentage: int


class DonationModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    campaign_id: int
    donor_name: str
    donor_email: str | None
    donor_phone: str | None
    amount: float
    message: str | None
    payment_status: PaymentStatus
    payment_proof_url: str | None
    created_at: datetime
    confirmed_at: datetime | None


M = TypeVar("M", bound=BaseModel)


def parse(schema: type[M], data: Any) -> M:
    """Validate inbound data, turning pydantic's error into ours."""
    try:
        return schema.model_validate(data or {})
    except PydanticValidationError as e:
        details = [
            {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
            for err in e.errors()
        ]
        first = details[0] if details else {"loc": "", "msg": "invalid input"}
        msg = f"{first['loc']}: {first['msg']}" if first["loc"] else first["msg"]
        raise ValidationError(msg, details) from e


def dump(schema: type[BaseModel], obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, list):
        return [schema.model_validate(o).model_dump(mode="json") for o in obj]
    return schema.model_validate(obj).model_dump(mode="json")
