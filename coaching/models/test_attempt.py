from sqlalchemy import Column, Integer, DateTime, ForeignKey, Float, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from coaching.core.database import Base
from coaching.core.constants import AttemptStatusEnum

class TestAttempt(Base):
    __test__ = False
    __tablename__ = "test_attempts"
    # One attempt per student per exam; start_attempt relies on this to resolve races.
    __table_args__ = (UniqueConstraint("user_id", "exam_id", name="uq_test_attempts_user_exam"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    exam_id = Column(Integer, ForeignKey("exams.id"), nullable=False, index=True)
    status = Column(Enum(AttemptStatusEnum), nullable=False, default=AttemptStatusEnum.IN_PROGRESS)
    started_at = Column(DateTime(timezone=True), server_default=func.now())
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    total_score = Column(Float, nullable=False, default=0)
    physics = Column(Float, nullable=False, default=0)
    chemistry = Column(Float, nullable=False, default=0)
    maths = Column(Float, nullable=False, default=0)
    biology = Column(Float, nullable=False, default=0)
    correct_count = Column(Integer, nullable=False, default=0)
    wrong_count = Column(Integer, nullable=False, default=0)
    skipped_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="test_attempts")
    exam = relationship("Exam", back_populates="attempts")
    answers = relationship("Answer", back_populates="attempt", cascade="all, delete-orphan")
