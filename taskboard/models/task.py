"""
Task Model
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from taskboard.utils.timezone import utcnow
from taskboard.database import Base


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, default="", nullable=False)
    deadline = Column(DateTime(timezone=True), nullable=True)
    is_favorite = Column(Boolean, default=False, nullable=False)
    column_id = Column(Integer, ForeignKey("task_columns.id", ondelete="RESTRICT"), nullable=False, index=True)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<Task(id={self.id}, name='{self.name}', column_id={self.column_id}, sort_order={self.sort_order})>"
