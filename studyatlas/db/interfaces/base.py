from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


class BaseDatabase(ABC):
    """Minimal surface the API needs from a relational database."""

    @abstractmethod
    def startup(self) -> None:
        ...

    @abstractmethod
    def teardown(self) -> None:
        ...

    @abstractmethod
    @contextmanager
    def get_session(self) -> Iterator[Session]:
        ...
