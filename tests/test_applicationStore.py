"""
Unit tests for saving development applications (sqlite database in a temporary directory).
"""

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

import defineSQLAlchemyDB as dbConfig
from applicationRecords import DevelopmentApplication
from applicationStore import initializeDatabase, insertRow

APPLICATION = DevelopmentApplication("10/2019", "4665 PRINCES HIGHWAY, MENINGIE SA 5264", "Dwelling",
                                     "https://www.streakybay.sa.gov.au/register.pdf", "mailto:dcstreaky@streakybay.sa.gov.au",
                                     "2024-01-02", "2019-03-12")


@pytest.fixture
def engine(tmp_path):
    return initializeDatabase(f"sqlite:///{tmp_path / 'data.sqlite'}")


def test_insert(engine):
    assert insertRow(engine, APPLICATION)
    with Session(engine) as session:
        row = session.get(dbConfig.DATA, "10/2019")
        assert row.address == APPLICATION.address
        assert row.comment_url == APPLICATION.commentUrl
        assert row.date_received == "2019-03-12"


def test_existing_application_is_kept(engine):
    assert insertRow(engine, APPLICATION)
    assert not insertRow(engine, APPLICATION._replace(description="Changed"))
    with Session(engine) as session:
        rows = session.scalars(select(dbConfig.DATA)).all()
        assert len(rows) == 1
        assert rows[0].description == "Dwelling"


def test_initialize_is_repeatable(tmp_path):
    connectionString = f"sqlite:///{tmp_path / 'data.sqlite'}"
    insertRow(initializeDatabase(connectionString), APPLICATION)
    assert not insertRow(initializeDatabase(connectionString), APPLICATION)
