"""Resort service catalog use cases"""

import logging
from typing import List
from libs.result import Result, Return
from src.app.errors import ErrorCode, error, persistence_error
from src.app.repositories.catalog_repository import ServiceRepository
from src.app.repositories.invoice_line_repository import InvoiceLineRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.service import Service
from .dtos import (
    CreateServiceCommandDTO,
    ServiceDTO,
    UpdateServiceCommandDTO,
    catalog_changes,
    service_to_dto,
)

logger = logging.getLogger(__name__)


class ListServices:

    def __init__(self, service_repo: ServiceRepository):
        self.service_repo = service_repo

    async def execute(self, active_only: bool = False) -> Result[List[ServiceDTO]]:
        try:
            services = await self.service_repo.list(active_only=active_only)
            return Return.ok([service_to_dto(service) for service in services])
        except Exception as e:
            return Return.err(persistence_error("Failed to list services", e))


class CreateService:

    def __init__(self, uow: UnitOfWork, service_repo: ServiceRepository):
        self.uow = uow
        self.service_repo = service_repo

    async def execute(self, command: CreateServiceCommandDTO) -> Result[ServiceDTO]:
        name = command.name.strip()
        if not name:
            return Return.err(error(ErrorCode.INVALID_REQUEST, "Service name is required"))

        try:
            service = await self.service_repo.create(
                Service(
                    name=name,
                    description=command.description,
                    price=command.price,
                    tax_percentage=command.tax_percentage,
                    is_active=command.is_active,
                )
            )
            await self.uow.commit()

            logger.info(f"Service {service.id} created: {service.name}")
            return Return.ok(service_to_dto(service))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to create service", e))


class UpdateService:

    def __init__(self, uow: UnitOfWork, service_repo: ServiceRepository):
        self.uow = uow
        self.service_repo = service_repo

    async def execute(self, service_id: int, command: UpdateServiceCommandDTO) -> Result[ServiceDTO]:
        try:
            changes = catalog_changes(command)
        except ValueError as e:
            return Return.err(error(ErrorCode.INVALID_REQUEST, f"Service {e}"))

        try:
            service = await self.service_repo.get_by_id(service_id)
            if not service:
                return Return.err(
                    error(ErrorCode.SERVICE_NOT_FOUND, f"Service with ID {service_id} not found")
                )

            for field, value in changes.items():
                setattr(service, field, value)

            service = await self.service_repo.update(service)
            await self.uow.commit()

            logger.info(f"Service {service_id} updated: {sorted(changes)}")
            return Return.ok(service_to_dto(service))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to update service", e))


class DeleteService:
    """
    Use Case: Remove a service from the catalog

    Refused with a conflict while any invoice line references the service.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        service_repo: ServiceRepository,
        invoice_line_repo: InvoiceLineRepository,
    ):
        self.uow = uow
        self.service_repo = service_repo
        self.invoice_line_repo = invoice_line_repo

    async def execute(self, service_id: int) -> Result[None]:
        try:
            service = await self.service_repo.get_by_id(service_id)
            if not service:
                return Return.err(
                    error(ErrorCode.SERVICE_NOT_FOUND, f"Service with ID {service_id} not found")
                )

            usage = await self.invoice_line_repo.count_by_service(service_id)
            if usage:
                return Return.err(
                    error(
                        ErrorCode.CATALOG_ENTRY_IN_USE,
                        f"Service {service_id} is referenced by {usage} invoice line(s)",
                    )
                )

            await self.service_repo.delete(service)
            await self.uow.commit()

            logger.info(f"Service {service_id} deleted")
            return Return.ok()

        except Exception as e:
            await self.uow.rollback()
            return Return.err(persistence_error("Failed to delete service", e))
