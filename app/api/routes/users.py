"""Admin user management: list, view, edit and delete accounts."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.api.routes.auth import get_account_store
from app.schemas.auth import AccountPublic, UserUpdateRequest, UsersListResponse
from app.services import user_admin
from app.services.account_store import AccountStore

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    store: Annotated[AccountStore, Depends(get_account_store)],
) -> UsersListResponse:
    """List all accounts (admin only). Password hashes are never included."""
    return UsersListResponse(users=user_admin.list_accounts(store))


@router.get("/{user_id}", response_model=AccountPublic)
def get_user(
    user_id: int,
    store: Annotated[AccountStore, Depends(get_account_store)],
) -> AccountPublic:
    return user_admin.get_account(store, user_id)


@router.put("/{user_id}", response_model=AccountPublic)
def edit_user(
    user_id: int,
    body: UserUpdateRequest,
    store: Annotated[AccountStore, Depends(get_account_store)],
) -> AccountPublic:
    """
    Change username, role and optionally enabled.

    404 if the account does not exist, 409 if the username belongs to another account.
    """
    return user_admin.update_account(
        store, user_id, username=body.username, role=body.role, enabled=body.enabled
    )


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    store: Annotated[AccountStore, Depends(get_account_store)],
) -> Response:
    """Delete an account permanently. 409 if orders still reference it."""
    user_admin.delete_account(store, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
