from __future__ import annotations

from app.application.ports.pricing_repository import PricingRepositoryPort
from app.domain.entities.service_catalog import ServiceCatalogEntry


class ListServicesUseCase:
    def __init__(self, repository: PricingRepositoryPort) -> None:
        self._repository = repository

    def execute(self) -> list[ServiceCatalogEntry]:
        return self._repository.list_active_services()
