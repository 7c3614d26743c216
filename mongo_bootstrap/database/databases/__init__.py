"""
Database definitions and collection constants.
"""
from mongo_bootstrap.database.databases import admin_db, service_db

__all__ = ["admin_db", "service_db"]
