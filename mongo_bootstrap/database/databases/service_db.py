"""
Service database configuration.
Backing store of the product service; every name can be overridden from settings.
"""

DEFAULT_DB_NAME = "product-service"
DEFAULT_USERNAME = "productAdmin"
DEFAULT_ROLE = "readWrite"


class Collections:
    """Collection names created in the service database by default."""
    USER = "user"
