from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from .db import Base


class Link(Base):
    __tablename__ = "links"
    id = Column(Integer, primary_key=True, index=True)
    # stored lower-cased so lookups and uniqueness are case-insensitive
    short_code = Column(String(20), unique=True, index=True, nullable=False)
    target_url = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class CorrelationRecord(Base):
    """One redirect event; the primary key doubles as the tracking identifier."""

    __tablename__ = "fingerprints"
    id = Column(Integer, primary_key=True, autoincrement=True)
    link_id = Column(Integer, ForeignKey("links.id"), nullable=False, index=True)
    requestor_ip = Column(String, nullable=True)
    user_agent = Column(Text, nullable=True)
    server_data = Column(JSON, nullable=False, default=dict)
    client_data = Column(JSON, nullable=True)
    behavior_data = Column(JSON, nullable=True)
    combined_data = Column(JSON, nullable=True)
    # written together with combined_data; identical devices may share a hash
    content_hash = Column(String(64), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    correlated_at = Column(DateTime, nullable=True)

    link = relationship("Link")
