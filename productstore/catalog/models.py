"""SQLAlchemy models for the product catalog.

Defines the Product table for persistent storage.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from productstore.domain.product import new_object_id
from productstore.infrastructure.database import Base
from productstore.infrastructure.models import User


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: 24-hex-character product identifier.
        product_name: Product name as entered (trimmed).
        name_key: Lower-cased name, unique across the catalog.
        category: Electronics, Clothing or Food.
        price: Unit price.
        quantity: Units held.
        total_value: price * quantity, written by the service layer.
        in_stock: Whether product is available.
        description: Product description.
        created_by: Owning user ID.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    product_name: Mapped[str] = mapped_column(String(100), nullable=False)
    name_key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    total_value: Mapped[float] = mapped_column(Float, nullable=False)
    in_stock: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    owner: Mapped[User] = relationship(User, lazy="raise")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, product_name={self.product_name[:30]})>"
