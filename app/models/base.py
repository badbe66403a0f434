"""Declarative Base shared by the users and orders tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
