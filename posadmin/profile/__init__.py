from .routes import profile_router

__all__ = ["profile_router"]
