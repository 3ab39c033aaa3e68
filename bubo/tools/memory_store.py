"""
bubo/tools/memory_store.py
==========================

Local SQLite store holding the ``memory`` key/value table.

The table is created at bootstrap and is not read or written by any endpoint
or tool: the agent is single-turn.  It is the place a conversation memory
would be persisted if one is added, at which point writes need serialising.
"""

import logging
from pathlib import Path
from typing import List, Optional

from sqlalchemy import Text, create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class Memory(Base):
    __tablename__ = "memory"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class MemoryStore:
    """Owns the SQLite engine and makes sure the schema exists.

    Parameters
    ----------
    database_path:
        Path of the SQLite file; ``":memory:"`` keeps it in-process.
    """

    def __init__(self, database_path: str):
        self.database_path = database_path
        if database_path != ":memory:":
            Path(database_path).parent.mkdir(parents=True, exist_ok=True)
        self.engine: Engine = create_engine(
            f"sqlite:///{database_path}",
            connect_args={"check_same_thread": False},
        )
        Base.metadata.create_all(bind=self.engine)
        logger.info("SQLite schema ready at %s", database_path)

    def table_names(self) -> List[str]:
        return inspect(self.engine).get_table_names()

    def close(self) -> None:
        self.engine.dispose()
