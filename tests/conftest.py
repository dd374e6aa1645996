import pytest

import amazon_store
from amazon_store import AccountManager, DatabaseManager, User, UserType


@pytest.fixture
def db():
    database = DatabaseManager(":memory:", seed=False)
    yield database
    database.close()


@pytest.fixture
def accounts(db):
    return AccountManager(db)


@pytest.fixture
def scripted_input(monkeypatch):
    """feed console answers in order; running out behaves like a closed stdin"""
    def feed(*answers):
        it = iter(answers)
        def read(prompt=""):
            try:
                return next(it)
            except StopIteration:
                raise EOFError from None
        monkeypatch.setattr("builtins.input", read)
    return feed


@pytest.fixture
def make_user(db):
    def make(name, latitude, longitude, type_="Customer", password="pw"):
        db.execute_update(
            "INSERT INTO Users(name, password, latitude, longitude, type) VALUES(?,?,?,?,?);",
            (name, password, latitude, longitude, type_)
        )
        user_id = db.get_current_sequence_value()
        return User(user_id, name, password, float(latitude), float(longitude), UserType.parse(type_))
    return make


@pytest.fixture
def make_store(db):
    def make(store_id, latitude, longitude, manager_id=None):
        db.execute_update(
            "INSERT INTO Store(storeID, latitude, longitude, managerID) VALUES(?,?,?,?);",
            (store_id, latitude, longitude, manager_id)
        )
        return store_id
    return make


@pytest.fixture
def make_product(db):
    def make(store_id, name, units, price=1.0):
        db.execute_update(
            "INSERT INTO Product(storeID, productName, numberOfUnits, pricePerUnit) VALUES(?,?,?,?);",
            (store_id, name, units, price)
        )
    return make


@pytest.fixture
def reset_logger():
    yield
    for handler in amazon_store.logger.handlers:
        handler.close()
    amazon_store.logger.handlers.clear()
    amazon_store.logger.propagate = True
