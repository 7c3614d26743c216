"""
mongo-bootstrap - idempotent MongoDB user and collection bootstrap.
"""

__version__ = "0.1.0"
