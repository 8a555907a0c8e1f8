"""Storefront HTTP API package."""

from storefront.api.errors import register_exception_handlers
from storefront.api.routes import cart_router, chat_router, product_router, session_router, user_router

routers = (product_router, cart_router, session_router, user_router, chat_router)

__all__ = [
    "cart_router",
    "chat_router",
    "product_router",
    "register_exception_handlers",
    "routers",
    "session_router",
    "user_router",
]
