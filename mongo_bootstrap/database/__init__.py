"""
Database module - MongoDB connection and database definitions.

Connection helpers live in mongo_bootstrap.database.connections.
"""
from mongo_bootstrap.database.databases import admin_db, service_db

__all__ = ["admin_db", "service_db"]
