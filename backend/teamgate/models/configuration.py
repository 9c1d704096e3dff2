"""Configuration ORM — runtime feature flags and password policies.

Invariants:
    - field is unique; value is always a string (flags are "0"/"1"/"2")
    - password_type (a configuration field) names a row of password_types
    - this service only reads these tables

Design Decisions:
    - String values over typed columns: admin tooling edits every setting
      through one generic form
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from teamgate.db.base import Base


class ConfigurationSetting(Base):
    """One named runtime setting."""
    __tablename__ = "configuration"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    field: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")


class PasswordType(Base):
    """Named password policy; value is a regex matched against the whole password."""
    __tablename__ = "password_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    field: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
