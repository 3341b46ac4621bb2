"""Inspection region (point) model."""
from sqlalchemy import BigInteger, Float, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inspection.database import Base


class Region(Base):
    """A single inspection point with its category and group membership."""

    __tablename__ = "inspection_region"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    group_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("inspection_group.id"), nullable=False
    )
    coord_x: Mapped[float] = mapped_column(Float, nullable=False)
    coord_y: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[int] = mapped_column(Integer, nullable=False)

    group: Mapped["Group"] = relationship("Group", back_populates="regions")

    def __repr__(self) -> str:
        return (
            f"Region(id={self.id}, group_id={self.group_id}, "
            f"x={self.coord_x}, y={self.coord_y}, category={self.category})"
        )
