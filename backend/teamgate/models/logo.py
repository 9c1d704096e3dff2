"""Logo ORM — catalogue of team logos, built-in and custom uploads.

Invariants:
    - name is unique and is what teams reference
    - custom logos are created by registration, never offered as random defaults
    - protected logos are reserved (e.g. for admin teams) and never assigned randomly
"""

from sqlalchemy import Boolean, Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from teamgate.db.base import Base


class Logo(Base):
    """Logo asset — payload stored inline."""
    __tablename__ = "logos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    logo_type: Mapped[str] = mapped_column(String(10), nullable=False, default="png")
    payload: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)
    enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    protected: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    custom: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
