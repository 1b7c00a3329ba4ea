"""SQLAlchemy models for identity records.

Users are owned by the authentication service; the catalog only reads them
to resolve product owners.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from productstore.domain.product import new_object_id
from productstore.infrastructure.database import Base


class User(Base):
    """User account referenced by products.

    Attributes:
        id: 24-hex-character user identifier.
        username: Display name.
        email: Contact email.
        created_at: Creation timestamp.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(24), primary_key=True, default=new_object_id)
    username: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<User(id={self.id}, username={self.username})>"
