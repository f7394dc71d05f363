"""
GraphQL API - read-only queries over the same services as REST.
Challenge: Same auth gate and ownership scoping as REST without duplicating queries.
Design: The context getter depends on CurrentUserId, so an unauthenticated request
never reaches a resolver. Resolvers share the request's AsyncSession; sibling root fields run
concurrently, so each resolver holds the context's lock while it queries.
"""

import asyncio
from typing import Optional

import strawberry
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info
from strawberry.types.nodes import SelectedField

from app.config import get_settings
from app.core.dependencies import CurrentUserId
from app.db.repositories.item_in_receipt_repository import ItemInReceiptRepository
from app.db.repositories.item_repository import ItemRepository
from app.db.repositories.location_repository import LocationRepository
from app.db.repositories.receipt_repository import ReceiptRepository
from app.db.session import DbSession
from app.graphql.types import ItemInReceipt, Location, Receipt
from app.services.item_in_receipt_service import ItemInReceiptService
from app.services.location_service import LocationService
from app.services.receipt_service import ReceiptService


def _line_service(session) -> ItemInReceiptService:
    return ItemInReceiptService(
        ItemInReceiptRepository(session),
        ReceiptRepository(session),
        ItemRepository(session),
    )


def _has_field(selections, name: str) -> bool:
    """True if `name` is selected directly or inside a fragment."""
    for selection in selections:
        if isinstance(selection, SelectedField):
            if selection.name == name:
                return True
        elif _has_field(selection.selections, name):
            return True
    return False


def selects(info: Info, name: str) -> bool:
    return any(_has_field(field.selections, name) for field in info.selected_fields)


@strawberry.type
class Query:
    @strawberry.field
    async def locations(self, info: Info, name: Optional[str] = None) -> list[Location]:
        ctx = info.context
        async with ctx["db_lock"]:
            rows = await LocationService(LocationRepository(ctx["session"])).list_locations(ctx["user_id"], name)
        return [Location.from_response(row) for row in rows]

    @strawberry.field
    async def receipts(self, info: Info, location_id: Optional[str] = None) -> list[Receipt]:
        ctx = info.context
        session, user_id = ctx["session"], ctx["user_id"]
        async with ctx["db_lock"]:
            rows = await ReceiptService(ReceiptRepository(session), LocationRepository(session)).list_receipts(
                user_id, location_id=location_id
            )
            receipts = [Receipt.from_response(row) for row in rows]
            if receipts and selects(info, "itemsInReceipt"):
                lines = _line_service(session)
                for receipt in receipts:
                    receipt.items_in_receipt = [
                        ItemInReceipt.from_response(line) for line in await lines.list_lines(user_id, receipt.id)
                    ]
        return receipts

    @strawberry.field
    async def items_in_receipt(self, info: Info, receipt_id: Optional[str] = None) -> list[ItemInReceipt]:
        ctx = info.context
        async with ctx["db_lock"]:
            rows = await _line_service(ctx["session"]).list_lines(ctx["user_id"], receipt_id)
        return [ItemInReceipt.from_response(row) for row in rows]


schema = strawberry.Schema(query=Query)


async def get_context(user_id: CurrentUserId, session: DbSession) -> dict:
    """Merged into Strawberry's default context (request, response)."""
    # Root fields resolve concurrently; an AsyncSession takes one operation at a time
    return {"user_id": user_id, "session": session, "db_lock": asyncio.Lock()}


def create_graphql_router() -> GraphQLRouter:
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if get_settings().debug else None,
        allow_queries_via_get=False,
    )
