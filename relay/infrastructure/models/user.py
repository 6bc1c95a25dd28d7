"""SQLAlchemy model for the user table."""

from sqlalchemy import Column, String

from relay.infrastructure.database import Base, generate_id


class UserModel(Base):
    """Database representation of a discussion participant."""

    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=generate_id)
    full_name = Column(String(120), nullable=True)
    role = Column(String(30), nullable=False, default="USER")
    email = Column(String(120), nullable=True, index=True)


__all__ = ["UserModel"]
