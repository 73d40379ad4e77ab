"""Source repositories - users, orders and their watermark."""

from app.repositories.source.orders import OrderRepository
from app.repositories.source.users import UserRepository
from app.repositories.source.watermark import read_watermark

__all__ = [
    "UserRepository",
    "OrderRepository",
    "read_watermark",
]
