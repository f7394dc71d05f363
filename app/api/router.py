"""
API router - aggregates all endpoint modules (RESTful structure).
"""

from fastapi import APIRouter

from app.api.endpoints import auth, health, items, items_in_receipt, locations, receipts

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(locations.router, prefix="/locations", tags=["locations"])
api_router.include_router(items_in_receipt.router, prefix="/items/inreceipt", tags=["items in receipt"])
api_router.include_router(items.router, prefix="/items", tags=["items"])
api_router.include_router(receipts.router, prefix="/receipts", tags=["receipts"])
