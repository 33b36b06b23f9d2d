"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Float, String, Text
from sqlalchemy.sql import func

from .base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("length(name) > 0", name="ck_products_name_not_empty"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    price = Column(Float, nullable=False, default=0)
    colors = Column(JSON, nullable=False, default=list)
    description = Column(Text)
    asset_paths = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
