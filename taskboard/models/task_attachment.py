"""Task attachment metadata model"""
from sqlalchemy import Column, Integer, BigInteger, String, DateTime, ForeignKey
from taskboard.utils.timezone import utcnow

from taskboard.database import Base


class TaskAttachment(Base):
    __tablename__ = "task_attachments"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    file_name = Column(String(255), nullable=False)
    file_path = Column(String(1024), nullable=False)
    content_type = Column(String(100), default="", nullable=False)
    file_size = Column(BigInteger, default=0, nullable=False)
    uploaded_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
