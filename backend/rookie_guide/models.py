import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    String,
    Boolean,
    DateTime,
    ForeignKey,
    JSON,
    Text,
    Index,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from .database import Base

UNIVERSAL_LOCATION_TAG = "CN"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    phone = Column(String(11), unique=True, nullable=True)
    email = Column(String, unique=True, nullable=True)
    password_hash = Column(String, nullable=False)
    nickname = Column(String(50), nullable=False)
    avatar_url = Column(String)
    home_city = Column(String)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    templates = relationship("Template", back_populates="creator")
    checklists = relationship("UserChecklist", back_populates="user")


class Template(Base):
    __tablename__ = "templates"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    # "CN" is the universal tag, "CN-XX" narrows to a region
    location_tag = Column(String(50), nullable=False)
    # ordered list of {"title", "description", "order"}
    steps = Column(JSON, nullable=False, default=list)
    # reserved for template inheritance, stored but not interpreted
    parent_id = Column(UUID(as_uuid=True), ForeignKey("templates.id", ondelete="SET NULL"))
    created_by = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    is_official = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    creator = relationship("User", back_populates="templates")

    __table_args__ = (
        Index("idx_templates_location_tag", "location_tag"),
        Index("idx_templates_created_by", "created_by"),
        Index("idx_templates_created_at", "created_at"),
    )


class UserChecklist(Base):
    __tablename__ = "user_checklists"
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # reference only, the checklist never follows later template changes
    source_template_id = Column(UUID(as_uuid=True), ForeignKey("templates.id"), nullable=False)
    title = Column(String(255), nullable=False)
    # dense list of {"step_index", "completed", "completed_at"}, always
    # replaced as a whole
    progress_status = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    user = relationship("User", back_populates="checklists")

    __table_args__ = (
        Index("idx_user_checklists_user_id", "user_id"),
        Index("idx_user_checklists_created_at", "created_at"),
    )
