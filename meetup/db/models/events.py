from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    Float,
    DateTime,
    ForeignKey,
    Index,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Event(Base):
    __tablename__ = 'events'
    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey('groups.id', ondelete='CASCADE'), nullable=False)
    venue_id = Column(Integer, ForeignKey('venues.id', ondelete='SET NULL'), nullable=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String(20), nullable=False)  # 'Online'|'In person'
    capacity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False, default=0)
    # Naive UTC wall-clock values; SQLite does not keep offsets.
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    group = relationship('Group', back_populates='events', lazy='joined')
    venue = relationship('Venue', lazy='joined')
    attendances = relationship('Attendance', back_populates='event', cascade='all, delete-orphan', passive_deletes=True)
    images = relationship('EventImage', back_populates='event', cascade='all, delete-orphan', passive_deletes=True, order_by='EventImage.id')

    __table_args__ = (
        Index('idx_events_group_id', 'group_id'),
        Index('idx_events_start_date', 'start_date'),
        CheckConstraint("type in ('Online','In person')", name='ck_events_type'),
    )


class Attendance(Base):
    __tablename__ = 'attendances'
    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    status = Column(String(20), nullable=False, default='pending')  # 'pending'|'waitlist'|'attending'
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    event = relationship('Event', back_populates='attendances')
    user = relationship('User', lazy='joined')

    __table_args__ = (
        UniqueConstraint('event_id', 'user_id', name='uq_attendances_event_user'),
        CheckConstraint("status in ('pending','waitlist','attending')", name='ck_attendances_status'),
    )


class EventImage(Base):
    __tablename__ = 'event_images'
    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    url = Column(Text, nullable=False)
    preview = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    event = relationship('Event', back_populates='images')
