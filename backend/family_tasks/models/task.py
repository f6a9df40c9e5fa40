from sqlalchemy import Boolean, Column, DateTime, Integer, Text

from family_tasks.core.database import Base
from family_tasks.core.timestamps import utcnow


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(DateTime, nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    # Soft references: no ForeignKey constraint, cleared by the delete services.
    assigned_to = Column(Integer, nullable=True, index=True)  # family_members.id
    category_id = Column(Integer, nullable=True, index=True)  # categories.id
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
