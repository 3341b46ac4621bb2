"""Inspection group model."""
from sqlalchemy import BigInteger
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inspection.database import Base


class Group(Base):
    """Logical cluster of inspection regions."""

    __tablename__ = "inspection_group"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)

    regions: Mapped[list["Region"]] = relationship("Region", back_populates="group")

    def __repr__(self) -> str:
        return f"Group(id={self.id})"
