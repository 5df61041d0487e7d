"""
Venue repository functions.
"""
from __future__ import annotations

from typing import List, Optional
from sqlalchemy.orm import Session

from meetup.db import schemas, models


def get_venue(db: Session, venue_id: int) -> Optional[models.Venue]:
    return db.query(models.Venue).filter(models.Venue.id == venue_id).first()


def get_group_venues(db: Session, group_id: int) -> List[models.Venue]:
    return db.query(models.Venue).filter(models.Venue.group_id == group_id).order_by(models.Venue.id).all()


def create_venue(db: Session, group_id: int, venue: schemas.VenueCreate) -> models.Venue:
    db_venue = models.Venue(group_id=group_id, **venue.model_dump())
    db.add(db_venue)
    db.commit()
    db.refresh(db_venue)
    return db_venue


def update_venue(db: Session, db_venue: models.Venue, venue: schemas.VenueUpdate) -> models.Venue:
    for key, value in venue.model_dump(exclude_unset=True).items():
        setattr(db_venue, key, value)
    db.commit()
    db.refresh(db_venue)
    return db_venue
