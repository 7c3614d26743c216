"""
Tests for MongoDB connection handling.
"""

import pytest
from unittest.mock import MagicMock, patch


class TestMongoDBConnection:
    """Tests for MongoDB connection handling."""

    @pytest.mark.asyncio
    async def test_get_mongo_client_creates_connection(self):
        """get_mongo_client should create connection on first call."""
        with patch("mongo_bootstrap.database.connections.AsyncIOMotorClient") as mock_client, \
             patch("mongo_bootstrap.database.connections.get_settings") as mock_settings:

            mock_settings.return_value.mongo_uri = "mongodb://test:27017"
            mock_settings.return_value.mongo_server_selection_timeout_ms = 1500
            mock_instance = MagicMock()
            mock_client.return_value = mock_instance

            from mongo_bootstrap.database.connections import get_mongo_client

            client = await get_mongo_client()
            again = await get_mongo_client()

            mock_client.assert_called_once_with(
                "mongodb://test:27017",
                serverSelectionTimeoutMS=1500,
            )
            assert client is mock_instance
            assert again is client

    @pytest.mark.asyncio
    async def test_explicit_uri_overrides_settings(self):
        """A URI passed by the caller wins over MONGO_URI."""
        with patch("mongo_bootstrap.database.connections.AsyncIOMotorClient") as mock_client, \
             patch("mongo_bootstrap.database.connections.get_settings") as mock_settings:

            mock_settings.return_value.mongo_uri = "mongodb://test:27017"
            mock_settings.return_value.mongo_server_selection_timeout_ms = 5000

            from mongo_bootstrap.database.connections import get_mongo_client
            await get_mongo_client("mongodb://other:27018")

            mock_client.assert_called_once_with(
                "mongodb://other:27018",
                serverSelectionTimeoutMS=5000,
            )

    @pytest.mark.asyncio
    async def test_close_connections_cleans_up(self):
        """close_connections should close and forget the client."""
        mock_mongo = MagicMock()

        import mongo_bootstrap.database.connections as conn_module
        conn_module._mongo_client = mock_mongo

        from mongo_bootstrap.database.connections import close_connections
        await close_connections()

        mock_mongo.close.assert_called_once()
        assert conn_module._mongo_client is None

    @pytest.mark.asyncio
    async def test_get_database_returns_lazy_handle(self, fake_client):
        """get_database hands back client[name] without touching the server."""
        import mongo_bootstrap.database.connections as conn_module
        conn_module._mongo_client = fake_client

        from mongo_bootstrap.database.connections import get_database
        db = await get_database("svc-db")

        assert db.name == "svc-db"
        assert fake_client.server.calls == []
        assert fake_client.server.database_names() == []
