from sqlalchemy import Column, DateTime, Integer, String, Text

from family_tasks.core.database import Base
from family_tasks.core.timestamps import utcnow


class FamilyMember(Base):
    __tablename__ = "family_members"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    email = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
