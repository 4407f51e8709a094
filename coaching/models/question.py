from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import JSONB
from coaching.core.database import Base

class Question(Base):
    """Exam-scoped snapshot of a question. Not edited once attempts exist."""
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    exam_id = Column(Integer, ForeignKey("exams.id"), nullable=False, index=True)
    question_bank_id = Column(Integer, ForeignKey("question_bank.id"), nullable=True)
    question_text = Column(String, nullable=False)
    question_image = Column(String, nullable=True)
    solution_image = Column(String, nullable=True)
    options = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)  # {"a": "...", "b": "..."}
    correct_option = Column(String, nullable=False)  # "b" or "a,c" for multi-select
    subject = Column(String, nullable=False, default="General")
    topic = Column(String, nullable=True)
    question_type = Column(String, nullable=False, default="SINGLE")
    difficulty = Column(String, nullable=False, default="MEDIUM")
    marks = Column(Float, nullable=False, default=4)
    negative = Column(Float, nullable=False, default=-1)
    order_index = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    exam = relationship("Exam", back_populates="questions")
    answers = relationship("Answer", back_populates="question", cascade="all, delete-orphan")
