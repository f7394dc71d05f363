# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from app.db.repositories.item_in_receipt_repository import ItemInReceiptRepository
from app.db.repositories.item_repository import ItemRepository
from app.db.repositories.location_repository import LocationRepository
from app.db.repositories.receipt_repository import ReceiptRepository
from app.db.repositories.user_repository import UserRepository

__all__ = [
    "UserRepository",
    "LocationRepository",
    "ItemRepository",
    "ReceiptRepository",
    "ItemInReceiptRepository",
]
