from .routes import cashier_router

__all__ = ["cashier_router"]
