from uuid import uuid4

from sqlalchemy import JSON, Column, DateTime, Numeric, String, Text
from sqlalchemy.orm import relationship

from splitshare.db.session import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(String(64), primary_key=True, default=lambda: uuid4().hex)
    group_id = Column(String(64), nullable=False, index=True)
    cost = Column(Numeric(18, 2), nullable=False)
    description = Column(String, nullable=True)
    details = Column(Text, nullable=True)
    date = Column(DateTime(timezone=True), nullable=True)
    repeat_interval = Column(String(16), nullable=True)
    currency_code = Column(String(3), nullable=True)

    # the payer, embedded as {"id": ..., "firstName": ...}
    created_by = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    shares = relationship(
        "ExpenseShare",
        back_populates="expense",
        cascade="all, delete-orphan",
        order_by="ExpenseShare.position",
        lazy="selectin",
    )
