"""Orders endpoints: list, show, create, edit and delete orders."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.routes.auth import get_account_store, get_current_principal
from app.core.database import get_db
from app.schemas.auth import Principal
from app.schemas.order import OrderCreate, OrderRead, OrdersListResponse, OrderUpdate
from app.services import orders as orders_service
from app.services.account_store import AccountStore
from app.services.errors import NotFound

router = APIRouter()


@router.get("", response_model=OrdersListResponse)
def list_orders(db: Annotated[Session, Depends(get_db)]) -> OrdersListResponse:
    return OrdersListResponse(orders=orders_service.list_orders(db))


@router.get("/{order_id}", response_model=OrderRead)
def show_order(order_id: int, db: Annotated[Session, Depends(get_db)]) -> OrderRead:
    return orders_service.get_order(db, order_id)


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    db: Annotated[Session, Depends(get_db)],
    store: Annotated[AccountStore, Depends(get_account_store)],
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> OrderRead:
    """Create an order owned by the signed-in account. Any id in the body is ignored."""
    account = store.find_by_username(principal.username)
    created_by = account.id if account is not None else None
    return orders_service.create_order(db, body, created_by=created_by)


@router.put("/{order_id}", response_model=OrderRead)
def edit_order(
    order_id: int,
    body: OrderUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> OrderRead:
    return orders_service.update_order(db, order_id, body)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: int, db: Annotated[Session, Depends(get_db)]) -> Response:
    if not orders_service.delete_order(db, order_id):
        raise NotFound("Order not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
