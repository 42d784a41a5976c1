"""
Transfer objects for the HTTP API.

Field names are snake_case in Python and camelCase on the wire
(firstName, ownerId, initialInvestment...). Request models ignore unknown
fields, so ids or relations sent in an update body are simply dropped.
"""
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from franchisenexus.domain.roles import Role

# Non-negative amounts; travel as JSON numbers, not strings
Money = Annotated[Decimal, Field(ge=0), PlainSerializer(float, return_type=float, when_used="json")]


class APIModel(BaseModel):
    """Base model: camelCase aliases, ORM-friendly, extra fields ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class ErrorResponse(APIModel):
    """Body of every non-validation error"""
    status: int
    message: str


# ============================================
# Auth
# ============================================

class RegisterRequest(APIModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    phone_number: Optional[str] = None
    role: Role


class LoginRequest(APIModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResponse(APIModel):
    token: str
    user_id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Role


# ============================================
# Users
# ============================================

class UserResponse(APIModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    phone_number: Optional[str] = None
    profile_image: Optional[str] = None
    role: Role


class UserUpdateRequest(APIModel):
    """Profile fields only. Email and role are not editable."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    profile_image: Optional[str] = None


# ============================================
# Businesses
# ============================================

class BusinessFields(APIModel):
    name: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    logo: Optional[str] = None
    website: Optional[str] = None
    investment_required: Optional[Money] = None
    founded: Optional[str] = None
    number_of_locations: Optional[int] = Field(default=None, ge=0)


class BusinessCreateRequest(BusinessFields):
    name: str = Field(..., min_length=1)
    # Defaults to the caller when omitted
    owner_id: Optional[int] = None


class BusinessUpdateRequest(BusinessFields):
    pass


class BusinessResponse(BusinessFields):
    id: int
    owner_id: int


# ============================================
# Franchises
# ============================================

class FranchiseFields(APIModel):
    name: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    logo: Optional[str] = None
    initial_investment: Optional[Money] = None
    ongoing_fees: Optional[Money] = None
    contract_length: Optional[int] = Field(default=None, ge=0)
    requirements: Optional[str] = None
    support_provided: Optional[str] = None
    training_program: Optional[str] = None


class FranchiseCreateRequest(FranchiseFields):
    name: str = Field(..., min_length=1)
    business_id: int


class FranchiseUpdateRequest(FranchiseFields):
    pass


class FranchiseResponse(FranchiseFields):
    id: int
    business_id: int


# ============================================
# Applications
# ============================================

class ApplicationDocuments(APIModel):
    """Applicant-editable content. resume/financialStatement are opaque references."""
    cover_letter: Optional[str] = None
    resume: Optional[str] = None
    financial_statement: Optional[str] = None


class ApplicationCreateRequest(ApplicationDocuments):
    franchise_id: int
    # Defaults to the caller when omitted
    applicant_id: Optional[int] = None


class ApplicationUpdateRequest(ApplicationDocuments):
    pass


class ApplicationStatusRequest(APIModel):
    status: str


class ApplicationResponse(ApplicationDocuments):
    id: int
    status: str
    submission_date: datetime
    applicant_id: int
    franchise_id: int
