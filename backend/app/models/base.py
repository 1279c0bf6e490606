"""
base.py — Shared Declarative Base & Column Helpers

Purpose:
- One `Base` for every ORM model so relationships and `create_all()` see the
  whole schema.
- Small helpers for the columns every table repeats (string UUID ids, timestamps).
"""

import datetime
import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def id_column() -> Column:
    """String UUID primary key."""
    return Column(String(36), primary_key=True, default=new_id)


def created_at_column() -> Column:
    return Column(DateTime(timezone=True), nullable=False, default=utcnow)


def updated_at_column() -> Column:
    return Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
