from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import JSONB
from coaching.core.database import Base

class StudentProfile(Base):
    __tablename__ = "student_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    full_name = Column(String, index=True, nullable=False)
    mobile = Column(String, nullable=True)
    address = Column(String, nullable=True)
    batch_id = Column(Integer, ForeignKey("batches.id"), nullable=True, index=True)
    parent_id = Column(Integer, ForeignKey("parent_profiles.id"), nullable=True, index=True)

    fee_agreed = Column(Float, nullable=False, default=0)
    waive_off = Column(Float, nullable=False, default=0)
    late_penalty = Column(Float, nullable=False, default=0)
    installments = Column(Integer, nullable=False, default=1)
    next_payment_date = Column(DateTime(timezone=True), nullable=True)
    fee_agreement_date = Column(DateTime(timezone=True), nullable=True)
    # [{"amount": 50000, "due_date": "2025-04-01"}, ...]
    installment_schedule = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="student_profile")
    batch = relationship("Batch", back_populates="students")
    parent = relationship("ParentProfile", back_populates="children")
    fees_paid = relationship("FeeRecord", back_populates="student", order_by="FeeRecord.date.desc()")
    attendance = relationship("Attendance", back_populates="student")
