"""
Database Session Management
Creates the SQLAlchemy engine and session factory used by the product store.

Unlike a module-level engine, nothing here runs at import time: the store
calls these helpers when it is opened and disposes the engine when closed.
"""

import os
from typing import Callable

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool


def ensure_database_dir(database_url: str) -> None:
    """Create the parent folder of a file-backed SQLite database."""
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite"):
        return
    database = url.database
    if not database or database == ":memory:":
        return
    folder = os.path.dirname(os.path.abspath(database))
    os.makedirs(folder, exist_ok=True)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the engine for the catalog database.

    Configuration:
    - poolclass=StaticPool: a single connection is opened on first use and
      reused for the whole engine lifetime (also keeps in-memory databases alive)
    - check_same_thread=False: the connection may be used from a UI thread
      other than the one that opened it
    - echo: log all SQL statements
    """
    connect_args = {}
    if make_url(database_url).drivername.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        echo=echo,
        poolclass=StaticPool,
        connect_args=connect_args,
    )


def create_session_factory(engine: Engine) -> Callable[[], Session]:
    """
    Session factory bound to the engine.

    - autocommit=False: Require explicit commit() calls
    - autoflush=False: Require explicit flush() calls
    - expire_on_commit=False: rows stay readable after commit
    """
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine
    )
