"""
Location service - owner-scoped location use cases shared by REST and GraphQL.
"""

import logging

from sqlalchemy import func

from app.core.errors import ConflictError
from app.core.security import new_public_id
from app.db.models.location import Location
from app.db.repositories.location_repository import LocationRepository
from app.schemas.location import LocationCreate, LocationResponse, LocationUpdate

logger = logging.getLogger(__name__)


def location_to_response(location: Location) -> LocationResponse:
    return LocationResponse(
        id=location.public_id,
        name=location.name,
        address=location.address,
        created_at=location.created_at,
        updated_at=location.updated_at,
    )


class LocationService:
    """List/create/update/delete locations for one caller (internal user id)."""

    def __init__(self, location_repo: LocationRepository):
        self.location_repo = location_repo

    async def list_locations(self, user_id: int, name: str | None = None) -> list[LocationResponse]:
        locations = await self.location_repo.list_owned(user_id, name=name)
        return [location_to_response(loc) for loc in locations]

    async def create(self, user_id: int, data: LocationCreate) -> str:
        """Insert and commit; returns the new public id."""
        if await self.location_repo.name_taken(user_id, data.name):
            raise ConflictError(f"location {data.name!r} already exists")
        location = await self.location_repo.add(
            Location(
                public_id=new_public_id(),
                created_by=user_id,
                name=data.name,
                address=data.address,
            )
        )
        await self.location_repo.session.commit()
        logger.info("location created: %s", location.public_id)
        return location.public_id

    async def update(self, user_id: int, data: LocationUpdate) -> None:
        location_id = await self.location_repo.assert_owned(data.id, user_id)
        location = await self.location_repo.get_by_id(location_id)
        if data.name is not None:
            if await self.location_repo.name_taken(user_id, data.name, exclude_id=location_id):
                raise ConflictError(f"location {data.name!r} already exists")
            location.name = data.name
        if data.address is not None:
            location.address = data.address
        location.updated_at = func.now()
        await self.location_repo.session.commit()
        logger.info("location updated: %s", data.id)

    async def delete(self, user_id: int, public_id: str) -> None:
        location_id = await self.location_repo.assert_owned(public_id, user_id)
        location = await self.location_repo.get_by_id(location_id)
        await self.location_repo.delete(location)
        await self.location_repo.session.commit()
        logger.info("location deleted: %s", public_id)
