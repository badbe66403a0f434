"""ORM model for application accounts (auth and RBAC)."""

from sqlalchemy import Boolean, Column, Integer, String, true

from app.models.base import Base


class User(Base):
    """
    Account used for session login and role-based access control.

    role: 'admin' or 'user'
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user")
    enabled = Column(Boolean, nullable=False, default=True, server_default=true())
