"""
Tests for application services (use cases) against an in-memory database
"""
import pytest
from decimal import Decimal
from types import SimpleNamespace

from franchisenexus.application import (
    ApplicationService,
    AuthService,
    BusinessService,
    FranchiseService,
    UserService,
)
from franchisenexus.domain.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidStatusError,
    NotFoundError,
)
from franchisenexus.domain.roles import Role
from franchisenexus.domain.unit_of_work import SQLAlchemyUnitOfWork
from franchisenexus.domain.workflow import ApplicationStatusPolicy
from franchisenexus.schemas import (
    ApplicationCreateRequest,
    ApplicationUpdateRequest,
    BusinessCreateRequest,
    BusinessUpdateRequest,
    FranchiseCreateRequest,
    RegisterRequest,
    UserUpdateRequest,
)
from franchisenexus.services.token_service import TokenService
from tests.conftest import caller_for, make_user


@pytest.fixture
def auth_service():
    return AuthService(TokenService("service-test-secret"))


# ============================================
# Auth
# ============================================

class TestAuthService:
    """Registration, login and caller resolution"""

    @pytest.mark.asyncio
    async def test_register_then_login(self, test_db, auth_service):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            request = RegisterRequest(
                first_name="Ada", last_name="Owner", email="ada@example.com",
                password="Secret123", role=Role.FRANCHISOR,
            )

            user, token = await auth_service.register(uow, request)

            assert user.id is not None
            assert user.password_hash != "Secret123"
            assert token

            logged_in, login_token = await auth_service.login(uow, "ada@example.com", "Secret123")
            assert logged_in.id == user.id
            assert login_token

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, test_db, auth_service):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            request = RegisterRequest(email="dup@example.com", password="x", role=Role.FRANCHISEE)
            await auth_service.register(uow, request)

            with pytest.raises(DuplicateEmailError) as exc_info:
                await auth_service.register(uow, request)

            assert exc_info.value.message == "Email is already in use"
            assert len(await uow.users.list_all()) == 1

    @pytest.mark.asyncio
    async def test_login_failures_are_indistinguishable(self, test_db, auth_service):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            await make_user(session, "user@example.com", Role.FRANCHISEE, password="Right123")

            with pytest.raises(InvalidCredentialsError) as wrong_password:
                await auth_service.login(uow, "user@example.com", "Wrong123")
            with pytest.raises(InvalidCredentialsError) as unknown_email:
                await auth_service.login(uow, "nobody@example.com", "Right123")

            assert wrong_password.value.message == unknown_email.value.message

    @pytest.mark.asyncio
    async def test_resolve_caller(self, test_db, auth_service):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            user = await make_user(session, "user@example.com", Role.FRANCHISOR)
            token = TokenService("service-test-secret").issue_token(user)

            caller = await auth_service.resolve_caller(uow, token)

            assert caller.user_id == user.id
            assert caller.role is Role.FRANCHISOR

    @pytest.mark.asyncio
    async def test_resolve_caller_is_anonymous_for_bad_tokens(self, test_db, auth_service):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            user = await make_user(session, "user@example.com", Role.FRANCHISOR)
            forged = TokenService("other-secret").issue_token(user)
            ghost = TokenService("service-test-secret").issue_token(SimpleNamespace(email="ghost@example.com"))

            assert await auth_service.resolve_caller(uow, None) is None
            assert await auth_service.resolve_caller(uow, "garbage") is None
            assert await auth_service.resolve_caller(uow, forged) is None
            assert await auth_service.resolve_caller(uow, ghost) is None


# ============================================
# Users
# ============================================

class TestUserService:

    @pytest.mark.asyncio
    async def test_update_touches_profile_fields_only(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            user = await make_user(session, "user@example.com", Role.FRANCHISEE)

            updated = await UserService().update_user(
                uow, caller_for(user), user.id,
                UserUpdateRequest(first_name="New", last_name="Name", phone_number="555",
                                  profile_image="img/1.png"),
            )

            assert updated.first_name == "New"
            assert updated.profile_image == "img/1.png"
            assert updated.email == "user@example.com"
            assert updated.role is Role.FRANCHISEE

    @pytest.mark.asyncio
    async def test_unknown_user(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            admin = await make_user(session, "admin@example.com", Role.ADMIN)

            with pytest.raises(NotFoundError) as exc_info:
                await UserService().delete_user(uow, caller_for(admin), 999)

            assert exc_info.value.message == "User not found with id: 999"


# ============================================
# Businesses & franchises
# ============================================

class TestBusinessService:

    @pytest.mark.asyncio
    async def test_create_defaults_owner_to_caller(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            owner = await make_user(session, "owner@example.com", Role.FRANCHISOR)

            business = await BusinessService().create_business(
                uow, caller_for(owner),
                BusinessCreateRequest(name="Tech Co", industry="Technology",
                                      investment_required=Decimal("25000.50")),
            )

            assert business.owner_id == owner.id
            assert business.investment_required == Decimal("25000.50")

    @pytest.mark.asyncio
    async def test_create_with_unknown_owner(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            owner = await make_user(session, "owner@example.com", Role.FRANCHISOR)

            with pytest.raises(NotFoundError):
                await BusinessService().create_business(
                    uow, caller_for(owner), BusinessCreateRequest(name="Ghost Co", owner_id=42)
                )

            assert await uow.businesses.list_all() == []

    @pytest.mark.asyncio
    async def test_update_never_changes_owner(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            owner = await make_user(session, "owner@example.com", Role.FRANCHISOR)
            other = await make_user(session, "other@example.com", Role.FRANCHISOR)
            service = BusinessService()
            business = await service.create_business(
                uow, caller_for(owner), BusinessCreateRequest(name="Tech Co")
            )

            request = BusinessUpdateRequest.model_validate(
                {"name": "Renamed", "ownerId": other.id, "id": 77}
            )
            updated = await service.update_business(uow, caller_for(other), business.id, request)

            assert updated.id == business.id
            assert updated.name == "Renamed"
            assert updated.owner_id == owner.id

    @pytest.mark.asyncio
    async def test_list_by_unknown_owner(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)

            with pytest.raises(NotFoundError):
                await BusinessService().list_businesses_by_owner(uow, 5)


class TestFranchiseService:

    @pytest.mark.asyncio
    async def test_create_under_missing_business_writes_nothing(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            owner = await make_user(session, "owner@example.com", Role.FRANCHISOR)

            with pytest.raises(NotFoundError) as exc_info:
                await FranchiseService().create_franchise(
                    uow, caller_for(owner), FranchiseCreateRequest(name="Orphan", business_id=999)
                )

            assert exc_info.value.message == "Business not found with id: 999"
            assert await uow.franchises.list_all() == []

    @pytest.mark.asyncio
    async def test_location_defaults_to_empty_city(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            owner = await make_user(session, "owner@example.com", Role.FRANCHISOR)
            business = await BusinessService().create_business(
                uow, caller_for(owner), BusinessCreateRequest(name="Tech Co")
            )
            service = FranchiseService()
            await service.create_franchise(
                uow, caller_for(owner),
                FranchiseCreateRequest(name="Paris", country="France", city="Paris", business_id=business.id),
            )

            assert await service.list_franchises_by_location(uow, "France") == []
            assert len(await service.list_franchises_by_location(uow, "france", "PARIS")) == 1

    @pytest.mark.asyncio
    async def test_delete_unknown_franchise(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            owner = await make_user(session, "owner@example.com", Role.FRANCHISOR)

            with pytest.raises(NotFoundError) as exc_info:
                await FranchiseService().delete_franchise(uow, caller_for(owner), 999)

            assert exc_info.value.message == "Franchise not found with id: 999"


# ============================================
# Applications
# ============================================

async def _franchise_and_applicant(session, uow):
    owner = await make_user(session, "owner@example.com", Role.FRANCHISOR)
    applicant = await make_user(session, "applicant@example.com", Role.FRANCHISEE)
    business = await BusinessService().create_business(
        uow, caller_for(owner), BusinessCreateRequest(name="Tech Co")
    )
    franchise = await FranchiseService().create_franchise(
        uow, caller_for(owner), FranchiseCreateRequest(name="Tech Paris", business_id=business.id)
    )
    return owner, applicant, franchise


class TestApplicationService:

    @pytest.mark.asyncio
    async def test_create_assigns_pending_and_submission_date(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            _, applicant, franchise = await _franchise_and_applicant(session, uow)

            request = ApplicationCreateRequest.model_validate({
                "franchiseId": franchise.id,
                "coverLetter": "Hire me",
                "status": "Approved",
                "submissionDate": "1999-01-01T00:00:00",
            })
            application = await ApplicationService().create_application(
                uow, caller_for(applicant), request
            )

            assert application.status == "Pending"
            assert application.submission_date.year != 1999
            assert application.applicant_id == applicant.id
            assert application.cover_letter == "Hire me"

    @pytest.mark.asyncio
    async def test_create_for_missing_franchise(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            _, applicant, _ = await _franchise_and_applicant(session, uow)

            with pytest.raises(NotFoundError) as exc_info:
                await ApplicationService().create_application(
                    uow, caller_for(applicant), ApplicationCreateRequest(franchise_id=404)
                )

            assert "Franchise" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_status_update_leaves_documents_unchanged(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            owner, applicant, franchise = await _franchise_and_applicant(session, uow)
            service = ApplicationService()
            application = await service.create_application(
                uow, caller_for(applicant),
                ApplicationCreateRequest(franchise_id=franchise.id, cover_letter="Letter", resume="cv.pdf"),
            )
            submitted_at = application.submission_date

            updated = await service.update_application_status(
                uow, caller_for(owner), application.id, "Approved"
            )

            assert updated.status == "Approved"
            assert updated.cover_letter == "Letter"
            assert updated.resume == "cv.pdf"
            assert updated.submission_date == submitted_at

    @pytest.mark.asyncio
    async def test_document_update_leaves_status_unchanged(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            owner, applicant, franchise = await _franchise_and_applicant(session, uow)
            service = ApplicationService()
            application = await service.create_application(
                uow, caller_for(applicant), ApplicationCreateRequest(franchise_id=franchise.id)
            )
            await service.update_application_status(uow, caller_for(owner), application.id, "Rejected")

            request = ApplicationUpdateRequest.model_validate(
                {"coverLetter": "Revised", "status": "Approved", "franchiseId": 12345}
            )
            updated = await service.update_application(uow, caller_for(applicant), application.id, request)

            assert updated.cover_letter == "Revised"
            assert updated.status == "Rejected"
            assert updated.franchise_id == franchise.id

    @pytest.mark.asyncio
    async def test_status_allow_list(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)
            owner, applicant, franchise = await _franchise_and_applicant(session, uow)
            service = ApplicationService(ApplicationStatusPolicy(["Approved", "Rejected"]))
            application = await service.create_application(
                uow, caller_for(applicant), ApplicationCreateRequest(franchise_id=franchise.id)
            )

            with pytest.raises(InvalidStatusError):
                await service.update_application_status(uow, caller_for(owner), application.id, "Maybe")

            reloaded = await service.get_application(uow, application.id)
            assert reloaded.status == "Pending"

    @pytest.mark.asyncio
    async def test_list_by_franchise_requires_franchise(self, test_db):
        async with test_db() as session:
            uow = SQLAlchemyUnitOfWork(session)

            with pytest.raises(NotFoundError):
                await ApplicationService().list_applications_by_franchise(uow, 1)
            with pytest.raises(NotFoundError):
                await ApplicationService().list_applications_by_applicant(uow, 1)
