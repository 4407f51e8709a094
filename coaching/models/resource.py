from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from coaching.core.database import Base

class Resource(Base):
    __tablename__ = "resources"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    url = Column(String, nullable=False)
    resource_type = Column(String, nullable=False, default="VIDEO")
    batch_id = Column(Integer, ForeignKey("batches.id"), nullable=True)  # null: visible to every batch
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    batch = relationship("Batch")
