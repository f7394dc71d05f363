"""
Location endpoints - the caller's shops and places.
Design: Thin controller; service layer holds business logic.
"""

from fastapi import APIRouter, Query, Response

from app.core.dependencies import CurrentUserId
from app.db.repositories.location_repository import LocationRepository
from app.db.session import DbSession
from app.schemas.common import DeleteById
from app.schemas.location import LocationCreate, LocationResponse, LocationUpdate
from app.services.location_service import LocationService

router = APIRouter()


def _get_location_service(session: DbSession) -> LocationService:
    """Factory for service with repository injection (Dependency Inversion)."""
    return LocationService(LocationRepository(session))


@router.get("", response_model=list[LocationResponse])
async def list_locations(session: DbSession, user_id: CurrentUserId, name: str | None = Query(None)):
    """REST: GET /locations?name=shop (case-sensitive substring)."""
    return await _get_location_service(session).list_locations(user_id, name)


@router.post("", response_class=Response)
async def create_location(session: DbSession, user_id: CurrentUserId, data: LocationCreate):
    await _get_location_service(session).create(user_id, data)


@router.put("", response_class=Response)
async def update_location(session: DbSession, user_id: CurrentUserId, data: LocationUpdate):
    await _get_location_service(session).update(user_id, data)


@router.delete("", response_class=Response)
async def delete_location(session: DbSession, user_id: CurrentUserId, data: DeleteById):
    await _get_location_service(session).delete(user_id, data.id)
