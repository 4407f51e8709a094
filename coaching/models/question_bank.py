from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, JSON
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import JSONB
from coaching.core.database import Base

class QuestionBank(Base):
    __tablename__ = "question_bank"

    id = Column(Integer, primary_key=True, index=True)
    question_text = Column(String, nullable=False)
    question_image = Column(String, nullable=True)
    solution_image = Column(String, nullable=True)
    options = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)
    correct_option = Column(String, nullable=False)
    subject = Column(String, index=True, nullable=False, default="General")
    topic = Column(String, nullable=True)
    difficulty = Column(String, nullable=False, default="MEDIUM")
    marks = Column(Float, nullable=False, default=4)
    negative = Column(Float, nullable=False, default=-1)
    expected_time = Column(Integer, nullable=True)
    created_by_id = Column(Integer, ForeignKey("teacher_profiles.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
