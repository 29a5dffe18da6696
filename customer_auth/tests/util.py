"""Testing helpers."""

from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Generator

from .. import store


@contextmanager
def temporary_db(database_uri: str = 'sqlite://',
                 create: bool = True, drop: bool = True) \
        -> Generator[store.CustomerStore, None, None]:
    """Provide an in-memory sqlite database for testing purposes."""
    customers = store.get_store(database_uri)
    if create:
        customers.create_all()
    try:
        yield customers
    finally:
        if drop:
            customers.drop_all()


class FakeClock(object):
    """A clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: int) -> None:
        self.current += timedelta(**kwargs)
