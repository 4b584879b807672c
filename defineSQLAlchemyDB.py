'''
-- SQLAchemy definition of the development application table and the gazetteer reference tables
'''

# pylint: disable=unused-private-member, missing-class-docstring, line-too-long, invalid-name

from sqlalchemy import String, Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass

class DATA(Base):
    __tablename__ = 'data'
    council_reference:Mapped[str] = mapped_column(String(50), primary_key = True, autoincrement = False)
    address:Mapped[str] = mapped_column(String(200), nullable = True)
    description:Mapped[str] = mapped_column(String(1000), nullable = True)
    info_url:Mapped[str] = mapped_column(String(500), nullable = True)
    comment_url:Mapped[str] = mapped_column(String(500), nullable = True)
    date_scraped:Mapped[str] = mapped_column(String(10), nullable = True)
    date_received:Mapped[str] = mapped_column(String(10), nullable = True)


class STREET_NAME(Base):
    __tablename__ = 'STREET_NAME'
    street_name_pid:Mapped[int] = mapped_column(Integer, primary_key = True, autoincrement = True)
    street_name:Mapped[str] = mapped_column(String(100), nullable = False)
    suburb_name:Mapped[str] = mapped_column(String(100), nullable = False)


class STREET_SUFFIX(Base):
    __tablename__ = 'STREET_SUFFIX'
    street_suffix_pid:Mapped[int] = mapped_column(Integer, primary_key = True, autoincrement = True)
    abbreviation:Mapped[str] = mapped_column(String(15), nullable = False, unique = True)
    suffix:Mapped[str] = mapped_column(String(50), nullable = False)


class SUBURB_NAME(Base):
    __tablename__ = 'SUBURB_NAME'
    suburb_name_pid:Mapped[int] = mapped_column(Integer, primary_key = True, autoincrement = True)
    suburb_key:Mapped[str] = mapped_column(String(100), nullable = False, unique = True)
    suburb_name:Mapped[str] = mapped_column(String(120), nullable = False)


class HUNDRED_NAME(Base):
    __tablename__ = 'HUNDRED_NAME'
    hundred_name_pid:Mapped[int] = mapped_column(Integer, primary_key = True, autoincrement = True)
    hundred_name:Mapped[str] = mapped_column(String(100), nullable = False, unique = True)
    suburb_names:Mapped[str] = mapped_column(String(500), nullable = True)
