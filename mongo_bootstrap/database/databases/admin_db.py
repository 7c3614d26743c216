"""
Admin database configuration.
Holds the cluster administrator used by tools like mongo-express.
"""

DB_NAME = "admin"

DEFAULT_USERNAME = "admin"
ROOT_ROLE = "root"
