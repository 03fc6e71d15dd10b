"""Tests for the cached MongoDB client."""

import unittest
from unittest.mock import MagicMock, patch

from pymongo.errors import ServerSelectionTimeoutError

from adapter.mongodb import connection


@patch.object(connection, '_client', None)
class TestGetMongodbClient(unittest.TestCase):

    @patch.object(connection, 'MONGO_URL', None)
    def test_missing_url_returns_none(self):
        self.assertIsNone(connection.get_mongodb_client())

    @patch.object(connection, 'MONGO_URL', 'mongodb://localhost:27017')
    @patch('adapter.mongodb.connection.MongoClient')
    def test_connects_once_and_caches(self, mock_client_cls):
        client = mock_client_cls.return_value

        self.assertIs(connection.get_mongodb_client(), client)
        self.assertIs(connection.get_mongodb_client(), client)

        mock_client_cls.assert_called_once()
        self.assertTrue(mock_client_cls.call_args.kwargs['tz_aware'])

    @patch.object(connection, 'MONGO_URL', 'mongodb://localhost:27017')
    @patch('adapter.mongodb.connection.MongoClient')
    def test_unreachable_server_returns_none(self, mock_client_cls):
        mock_client_cls.return_value.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
        self.assertIsNone(connection.get_mongodb_client())

    @patch.object(connection, 'MONGO_URL', 'mongodb://localhost:27017')
    @patch('adapter.mongodb.connection.MongoClient')
    def test_dead_cached_client_is_replaced(self, mock_client_cls):
        stale = MagicMock()
        stale.admin.command.side_effect = ServerSelectionTimeoutError("gone")
        connection._client = stale

        self.assertIs(connection.get_mongodb_client(), mock_client_cls.return_value)


if __name__ == '__main__':
    unittest.main()
