"""Entity classes shared by the unit tests."""

import datetime as dt
from typing import List, Optional

from sqlcraft.entities import PageCondition, between, entity, in_, like, transient


@entity(table="t_user")
class User:
    id: Optional[str] = None
    userName: Optional[str] = None


@entity(table="t_user")
class UserQuery(PageCondition):
    id: Optional[str] = None
    userName: Optional[str] = like()
    name: Optional[str] = None
    loginCount: Optional[int] = None
    createdAt: Optional[dt.datetime] = between("minCreatedAt", "maxCreatedAt")
    minCreatedAt: Optional[dt.datetime] = None
    maxCreatedAt: Optional[dt.datetime] = None
    idMarker: Optional[str] = in_("ids")
    ids: Optional[List[str]] = None
    score: Optional[int] = between("minScore", "maxScore")
    minScore: Optional[int] = None
    maxScore: Optional[int] = None
    password: Optional[str] = transient()


@entity()
class NoTable:
    id: Optional[str] = None


@entity(table="t_secret")
class AllTransient:
    token: Optional[str] = transient()


@entity(table="t_event")
class Event:
    day: Optional[dt.date] = None
