"""FastAPI integration for host services."""

from searchlink.api.integration import register_exception_handlers, searchlink_lifespan

__all__ = ["register_exception_handlers", "searchlink_lifespan"]
