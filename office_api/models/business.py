# ================================
# OFFICE LISTING MODELS (models/business.py)
# ================================

from sqlalchemy import Column, String, Text, Integer, Float, Boolean, Date, ForeignKey, Table, Index
from sqlalchemy.orm import relationship
from office_api.models.base import Base

# Office <-> Tag association
office_tags = Table(
    "offices_tags",
    Base.metadata,
    Column("office_id", Integer, ForeignKey("offices.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)

class Office(Base):
    """Office listing offered by a host"""
    __tablename__ = "offices"

    APPROVAL_PENDING = "pending"
    APPROVAL_APPROVED = "approved"
    APPROVAL_REJECTED = "rejected"

    # Changing any of these sends the office back to review
    REVIEW_FIELDS = ("lat", "lng", "price_per_day")

    # Foreign Keys
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Listing
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    # Location
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    address_line1 = Column(String(255), nullable=False)
    address_line2 = Column(String(255), nullable=True)

    # Pricing (minor currency units)
    price_per_day = Column(Integer, nullable=False)
    monthly_discount = Column(Integer, default=0, nullable=False)  # Percent

    # Visibility
    hidden = Column(Boolean, default=False, nullable=False)
    approval_status = Column(String(20), default=APPROVAL_PENDING, nullable=False)

    # Relationships
    user = relationship("User", back_populates="offices")
    tags = relationship("Tag", secondary=office_tags, back_populates="offices", order_by="Tag.id")
    images = relationship("OfficeImage", back_populates="office", cascade="all, delete-orphan", order_by="OfficeImage.id")
    reservations = relationship("Reservation", back_populates="office", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_offices_listing", "approval_status", "hidden"),
    )

    def __repr__(self):
        return f"<Office(id={self.id}, title='{self.title}', status='{self.approval_status}')>"

class Tag(Base):
    """Label attached to offices (e.g. 'has_ac', 'private_bathroom')"""
    __tablename__ = "tags"

    name = Column(String(100), nullable=False, unique=True)

    offices = relationship("Office", secondary=office_tags, back_populates="tags")

class OfficeImage(Base):
    """Image belonging to an office"""
    __tablename__ = "office_images"

    office_id = Column(Integer, ForeignKey("offices.id", ondelete="CASCADE"), nullable=False, index=True)
    path = Column(Text, nullable=False)

    office = relationship("Office", back_populates="images")

class Reservation(Base):
    """Reservation of an office by a visitor"""
    __tablename__ = "reservations"

    STATUS_ACTIVE = "active"
    STATUS_CANCELLED = "cancelled"

    # Foreign Keys
    office_id = Column(Integer, ForeignKey("offices.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)  # Visitor

    price = Column(Integer, nullable=False, default=0)
    status = Column(String(20), default=STATUS_ACTIVE, nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    # Relationships
    office = relationship("Office", back_populates="reservations")
    user = relationship("User", back_populates="reservations")
