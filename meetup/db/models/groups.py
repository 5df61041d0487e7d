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


class Group(Base):
    __tablename__ = 'groups'
    id = Column(Integer, primary_key=True, autoincrement=True)
    organizer_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    name = Column(String(60), nullable=False)
    about = Column(Text, nullable=False)
    type = Column(String(20), nullable=False)  # 'Online'|'In person'
    private = Column(Boolean, nullable=False, default=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    organizer = relationship('User', lazy='joined')
    memberships = relationship('Membership', back_populates='group', cascade='all, delete-orphan', passive_deletes=True)
    images = relationship('GroupImage', back_populates='group', cascade='all, delete-orphan', passive_deletes=True, order_by='GroupImage.id')
    venues = relationship('Venue', back_populates='group', cascade='all, delete-orphan', passive_deletes=True, order_by='Venue.id')
    events = relationship('Event', back_populates='group', cascade='all, delete-orphan', passive_deletes=True)

    __table_args__ = (
        Index('idx_groups_organizer_id', 'organizer_id'),
        CheckConstraint("type in ('Online','In person')", name='ck_groups_type'),
    )


class Membership(Base):
    __tablename__ = 'memberships'
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    group_id = Column(Integer, ForeignKey('groups.id', ondelete='CASCADE'), nullable=False)
    status = Column(String(20), nullable=False, default='pending')  # 'pending'|'member'|'co-host'
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    group = relationship('Group', back_populates='memberships')
    user = relationship('User', lazy='joined')

    __table_args__ = (
        UniqueConstraint('user_id', 'group_id', name='uq_memberships_user_group'),
        Index('idx_memberships_group_id', 'group_id'),
        CheckConstraint("status in ('pending','member','co-host')", name='ck_memberships_status'),
    )


class GroupImage(Base):
    __tablename__ = 'group_images'
    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey('groups.id', ondelete='CASCADE'), nullable=False)
    url = Column(Text, nullable=False)
    preview = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    group = relationship('Group', back_populates='images')


class Venue(Base):
    __tablename__ = 'venues'
    id = Column(Integer, primary_key=True, autoincrement=True)
    group_id = Column(Integer, ForeignKey('groups.id', ondelete='CASCADE'), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    group = relationship('Group', back_populates='venues')
