from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from coaching.core.database import Base
from coaching.core.constants import NoticeTargetEnum

class Notice(Base):
    __tablename__ = "notices"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    content = Column(String, nullable=False)
    target = Column(Enum(NoticeTargetEnum), nullable=False, default=NoticeTargetEnum.GLOBAL)
    # At most one of these is set, matching `target`.
    batch_id = Column(Integer, ForeignKey("batches.id"), nullable=True)
    student_id = Column(Integer, ForeignKey("student_profiles.id"), nullable=True)
    parent_id = Column(Integer, ForeignKey("parent_profiles.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    batch = relationship("Batch")
    recipients = relationship("NoticeRecipient", back_populates="notice", cascade="all, delete-orphan")

class NoticeRecipient(Base):
    """Audience of a notice, frozen when the notice is created."""
    __tablename__ = "notice_recipients"
    __table_args__ = (UniqueConstraint("notice_id", "user_id", name="uq_notice_recipients_notice_user"),)

    id = Column(Integer, primary_key=True, index=True)
    notice_id = Column(Integer, ForeignKey("notices.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    notice = relationship("Notice", back_populates="recipients")
