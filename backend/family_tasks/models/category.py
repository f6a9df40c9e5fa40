from sqlalchemy import Column, DateTime, Integer, String, Text

from family_tasks.core.database import Base
from family_tasks.core.timestamps import utcnow


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String, nullable=True)  # hex color code, e.g. #10b981
    created_at = Column(DateTime, nullable=False, default=utcnow)
