# Import every model so Base.metadata is complete (Alembic, create_all in tests)

from app.db.models.user import User
from app.db.models.location import Location
from app.db.models.item import Item
from app.db.models.receipt import Receipt
from app.db.models.item_in_receipt import ItemInReceipt

__all__ = ["User", "Location", "Item", "Receipt", "ItemInReceipt"]
