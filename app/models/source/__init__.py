"""Source models - the users and orders relations the summary is derived from."""

from app.models.source.order import ORDERS_DDL, ORDERS_INDEXES, ORDERS_SEQUENCE_DDL
from app.models.source.user import USERS_DDL, USERS_SEQUENCE_DDL

__all__ = [
    "USERS_SEQUENCE_DDL",
    "USERS_DDL",
    "ORDERS_SEQUENCE_DDL",
    "ORDERS_DDL",
    "ORDERS_INDEXES",
]
