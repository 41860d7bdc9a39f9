"""Aggregate router exports."""
from .messages import router as messages_router
from .servers import router as servers_router

__all__ = [
    "messages_router",
    "servers_router",
]
