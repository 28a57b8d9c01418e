"""Distribution location registry."""

from __future__ import annotations

from typing import Optional

from errors import ConflictError, NotFoundError, ValidationError
from repositories.distribution_repository import (
    DistributionLocationRepository,
    PhysicalDistributionRepository,
)
from schemas.dto.requests.distribution import (
    CreateLocationRequest,
    UpdateLocationRequest,
)
from schemas.models.distribution import LOCATION_TYPES, DistributionLocationDoc
from shared.logging import get_logger
from shared.validators import parse_object_id

log = get_logger(__name__)


class LocationService:
    def __init__(
        self,
        location_repo: DistributionLocationRepository,
        distribution_repo: PhysicalDistributionRepository,
    ) -> None:
        self._locations = location_repo
        self._distributions = distribution_repo

    @staticmethod
    def location_types() -> list[str]:
        return list(LOCATION_TYPES)

    async def list_locations(
        self,
        *,
        location_type: Optional[str] = None,
        is_active: Optional[bool] = None,
        city: Optional[str] = None,
    ) -> list[DistributionLocationDoc]:
        return await self._locations.list_locations(
            location_type=location_type, is_active=is_active, city=city
        )

    async def list_by_type(self, location_type: str) -> list[DistributionLocationDoc]:
        """Active locations of one type."""
        if location_type not in LOCATION_TYPES:
            raise ValidationError(
                f"Invalid location type: {location_type!r}",
                field="type",
                details={"allowed": list(LOCATION_TYPES)},
            )
        return await self._locations.list_locations(
            location_type=location_type, is_active=True
        )

    async def get_location(self, location_id: str) -> DistributionLocationDoc:
        location = await self._locations.find_by_id(
            parse_object_id(location_id, "location")
        )
        if location is None:
            raise NotFoundError("Distribution location not found")
        return location

    async def create_location(
        self, req: CreateLocationRequest
    ) -> DistributionLocationDoc:
        location = DistributionLocationDoc(**req.model_dump(), totes_count=0)
        location = await self._locations.insert(location)
        log.info(
            "location_created", location_id=str(location.id), location_type=location.type
        )
        return location

    async def update_location(
        self, location_id: str, req: UpdateLocationRequest
    ) -> DistributionLocationDoc:
        location = await self.get_location(location_id)
        fields = req.model_dump(exclude_unset=True)
        if not fields:
            return location
        updated = await self._locations.update_fields(location.id, fields)
        if updated is None:
            raise NotFoundError("Distribution location not found")
        log.info(
            "location_updated", location_id=str(location.id), fields=sorted(fields)
        )
        return updated

    async def delete_location(self, location_id: str) -> None:
        location = await self.get_location(location_id)
        referenced = await self._distributions.count(
            {"distribution_locations.location": location.id}
        )
        if referenced:
            raise ConflictError(
                "Location is still allocated by one or more physical distributions",
                details={"distributions": referenced},
            )
        await self._locations.delete_by_id(location.id)
        log.info("location_deleted", location_id=str(location.id))
