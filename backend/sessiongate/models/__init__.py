from sessiongate.models.user import User

__all__ = ["User"]
