"""Database package - all database-related code."""
from franchisenexus.db.connection import init_db, get_db_session, close_db
from franchisenexus.db.models import Base, UserModel, BusinessModel, FranchiseModel, ApplicationModel

__all__ = [
    "init_db",
    "get_db_session",
    "close_db",
    "Base",
    "UserModel",
    "BusinessModel",
    "FranchiseModel",
    "ApplicationModel",
]
