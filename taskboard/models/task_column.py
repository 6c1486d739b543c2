"""
Task Column Model
"""
from sqlalchemy import Column, Integer, String
from taskboard.database import Base


class TaskColumn(Base):
    __tablename__ = "task_columns"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<TaskColumn(id={self.id}, name='{self.name}', sort_order={self.sort_order})>"
