"""
Application Service - franchise applications and their status.

Two write paths touch disjoint fields:
- update_application: applicant documents (cover letter, resume, financial statement)
- update_application_status: status only
Routers gate them by role (Franchisee vs Franchisor/Admin).
"""

from typing import List, Optional
import logging

from franchisenexus.db.models import ApplicationModel
from franchisenexus.domain.errors import NotFoundError
from franchisenexus.domain.roles import Caller
from franchisenexus.domain.unit_of_work import AbstractUnitOfWork
from franchisenexus.domain.workflow import (
    APPLICANT_EDITABLE_FIELDS,
    ApplicationStatusPolicy,
    initial_status,
    submission_timestamp,
)
from franchisenexus.schemas import ApplicationCreateRequest, ApplicationDocuments

logger = logging.getLogger(__name__)


class ApplicationService:
    """Application service for franchise applications"""

    def __init__(self, status_policy: Optional[ApplicationStatusPolicy] = None):
        self._policy = status_policy or ApplicationStatusPolicy()

    async def list_applications(
        self,
        uow: AbstractUnitOfWork,
        caller: Optional[Caller] = None
    ) -> List[ApplicationModel]:
        return await uow.applications.list_all()

    async def get_application(
        self,
        uow: AbstractUnitOfWork,
        application_id: int,
        caller: Optional[Caller] = None
    ) -> ApplicationModel:
        application = await uow.applications.get_by_id(application_id)
        if not application:
            raise NotFoundError("Application", application_id)
        return application

    async def list_applications_by_applicant(
        self,
        uow: AbstractUnitOfWork,
        applicant_id: int,
        caller: Optional[Caller] = None
    ) -> List[ApplicationModel]:
        if not await uow.users.get_by_id(applicant_id):
            raise NotFoundError("User", applicant_id)
        return await uow.applications.list_by_applicant(applicant_id)

    async def list_applications_by_franchise(
        self,
        uow: AbstractUnitOfWork,
        franchise_id: int,
        caller: Optional[Caller] = None
    ) -> List[ApplicationModel]:
        if not await uow.franchises.get_by_id(franchise_id):
            raise NotFoundError("Franchise", franchise_id)
        return await uow.applications.list_by_franchise(franchise_id)

    async def list_applications_by_status(
        self,
        uow: AbstractUnitOfWork,
        status: str,
        caller: Optional[Caller] = None
    ) -> List[ApplicationModel]:
        return await uow.applications.list_by_status(status)

    async def create_application(
        self,
        uow: AbstractUnitOfWork,
        caller: Caller,
        request: ApplicationCreateRequest
    ) -> ApplicationModel:
        """
        Submit an application.

        Status and submission date are always server-assigned.

        Raises:
            NotFoundError: If the applicant or the franchise does not exist
        """
        applicant_id = request.applicant_id if request.applicant_id is not None else caller.user_id
        if not await uow.users.get_by_id(applicant_id):
            raise NotFoundError("User", applicant_id)
        if not await uow.franchises.get_by_id(request.franchise_id):
            raise NotFoundError("Franchise", request.franchise_id)

        application = ApplicationModel(
            status=initial_status(),
            submission_date=submission_timestamp(),
            applicant_id=applicant_id,
            franchise_id=request.franchise_id,
        )
        for field in APPLICANT_EDITABLE_FIELDS:
            setattr(application, field, getattr(request, field))

        application = await uow.applications.add(application)
        await uow.commit()

        logger.info(
            f"Created application {application.id} "
            f"(franchise={application.franchise_id}, applicant={applicant_id}) by user {caller.user_id}"
        )
        return application

    async def update_application(
        self,
        uow: AbstractUnitOfWork,
        caller: Caller,
        application_id: int,
        request: ApplicationDocuments
    ) -> ApplicationModel:
        """Replace the applicant documents. Status, dates and relations stay as they are."""
        application = await self.get_application(uow, application_id)

        for field in APPLICANT_EDITABLE_FIELDS:
            setattr(application, field, getattr(request, field))

        application = await uow.applications.save(application)
        await uow.commit()

        logger.info(f"Updated application {application.id} by user {caller.user_id}")
        return application

    async def update_application_status(
        self,
        uow: AbstractUnitOfWork,
        caller: Caller,
        application_id: int,
        status: str
    ) -> ApplicationModel:
        """
        Set the status of an application.

        Raises:
            NotFoundError: If the application does not exist
            InvalidStatusError: If a status allow-list is configured and excludes it
        """
        application = await self.get_application(uow, application_id)
        self._policy.check(status)

        previous = application.status
        application.status = status

        application = await uow.applications.save(application)
        await uow.commit()

        logger.info(
            f"Application {application.id} status '{previous}' -> '{status}' by user {caller.user_id}"
        )
        return application

    async def delete_application(self, uow: AbstractUnitOfWork, caller: Caller, application_id: int) -> None:
        await self.get_application(uow, application_id)
        await uow.applications.delete(application_id)
        await uow.commit()

        logger.info(f"Deleted application {application_id} by user {caller.user_id}")
