from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from app.models.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
