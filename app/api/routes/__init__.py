"""HTTP routes."""

from fastapi import APIRouter

from app.api.routes import auth, health, orders, users

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(users.router, prefix="/admin/users", tags=["admin"])
