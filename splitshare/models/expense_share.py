from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from splitshare.db.session import Base


class ExpenseShare(Base):
    __tablename__ = "expense_shares"

    id = Column(Integer, primary_key=True, index=True)
    expense_id = Column(String(64), ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False)

    user_id = Column(String(64), nullable=False, index=True)
    paid_share = Column(Numeric(18, 2), nullable=False)
    owed_share = Column(Numeric(18, 2), nullable=False)
    net_balance = Column(Numeric(18, 2), nullable=False)

    expense = relationship("Expense", back_populates="shares")
