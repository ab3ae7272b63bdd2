from .routes import superadmin_router

__all__ = ["superadmin_router"]
