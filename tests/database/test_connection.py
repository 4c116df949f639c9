import threading
import time

import mysql.connector
import pytest
from mysql.connector.errors import PoolError

from campus_catalog.database import connection
from campus_catalog.database.connection import DBConfig, DatabaseConnection


class SlowPool:
    built = 0

    def __init__(self, **kwargs):
        time.sleep(0.01)
        type(self).built += 1
        self.kwargs = kwargs

    def get_connection(self):
        return object()


class ExhaustedPool:
    def __init__(self, **kwargs):
        pass

    def get_connection(self):
        raise PoolError("Failed getting connection; pool exhausted")


def _config():
    return DBConfig(host="localhost", port=3306, user="root", password="", database="campus_catalog_test", pool_size=2)


def test_concurrent_first_connects_build_one_pool(monkeypatch):
    SlowPool.built = 0
    monkeypatch.setattr(connection.pooling, "MySQLConnectionPool", SlowPool)
    factory = DatabaseConnection(_config())
    barrier = threading.Barrier(8)

    def borrow():
        barrier.wait()
        factory.connect()

    threads = [threading.Thread(target=borrow) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert SlowPool.built == 1
    assert factory._get_pool().kwargs["pool_size"] == 2


def test_exhausted_pool_raises_instead_of_opening_extra_connections(monkeypatch):
    monkeypatch.setattr(connection.pooling, "MySQLConnectionPool", ExhaustedPool)

    def unexpected_connect(**kwargs):
        raise AssertionError("connect() outside the pool")

    monkeypatch.setattr(mysql.connector, "connect", unexpected_connect)

    with pytest.raises(PoolError):
        DatabaseConnection(_config()).connect()
