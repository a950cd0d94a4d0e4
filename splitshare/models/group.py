from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func, true

from splitshare.db.session import Base


class Group(Base):
    __tablename__ = "groups"

    id = Column(String(64), primary_key=True, default=lambda: uuid4().hex)
    name = Column(String, nullable=False)
    group_type = Column(String(16), nullable=True)
    simplify_by_default = Column(Boolean, nullable=False, server_default=true())
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)

    members = relationship(
        "GroupMember",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="GroupMember.id",
        lazy="selectin",
    )
