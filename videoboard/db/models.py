"""SQLAlchemy models mirroring the JSON document layout."""
from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from .session import Base


class Group(Base):
    __tablename__ = "groups"

    id = Column(String(255), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    videos = relationship("Video", back_populates="group", passive_deletes=True)


class Video(Base):
    __tablename__ = "videos"
    # ids nunca reutilizados no SQLite, igual ao SERIAL do Postgres
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(String(255), ForeignKey("groups.id", ondelete="CASCADE"), nullable=True)
    url = Column(Text, nullable=False)
    username = Column(String(255), nullable=False)
    caption = Column(Text, nullable=True)
    description = Column(Text, nullable=True)

    group = relationship("Group", back_populates="videos")
