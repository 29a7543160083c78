from .routes import MANAGER_KEY, create_app

__all__ = ["MANAGER_KEY", "create_app"]
