"""Test fixtures: in-memory DB and listing factories."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from boardmatch import models  # noqa: F401  register tables
from boardmatch.database import Base
from boardmatch.models import Surfboard


@pytest.fixture()
def db():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine)()
    yield session
    session.close()


@pytest.fixture()
def add_board(db):
    def _add(id: str, name: str, source: str, **kwargs) -> Surfboard:
        board = Surfboard(id=id, name=name, source=source, **kwargs)
        db.add(board)
        db.commit()
        return board

    return _add
