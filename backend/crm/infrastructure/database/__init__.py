from .base import Base
from .session import CrmSession, engine, async_session_factory, get_db_session
from .models import CustomerModel, UserModel, RoleModel

__all__ = [
    "Base",
    "CrmSession",
    "engine",
    "async_session_factory",
    "get_db_session",
    "CustomerModel",
    "UserModel",
    "RoleModel",
]
