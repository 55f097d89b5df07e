from __future__ import annotations

import logging
import os
from typing import List, Optional

from sqlalchemy import Engine, create_engine, select
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from .models import Base, Task
from .repositories import Repository
from .schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str) -> Engine:
    """
    Build an Engine for ``database_url``.

    SQLite file databases get their parent directory created, and their
    connections are allowed to cross threads since sync routes run on the
    threadpool.
    """
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            os.makedirs(os.path.dirname(url.database) or ".", exist_ok=True)
    return create_engine(url, connect_args=connect_args)


class SQLAlchemyRepository(Repository):
    """
    Repository over the ``todos`` table. Each operation runs in its own
    session and transaction.
    """

    def __init__(self, database_url: str) -> None:
        self._engine = create_db_engine(database_url)
        self._session = sessionmaker(bind=self._engine, expire_on_commit=False)
        self._init_db()

    @property
    def engine(self) -> Engine:
        return self._engine

    def _init_db(self) -> None:
        Base.metadata.create_all(self._engine)
        logger.info(
            "Task store ready at %s",
            self._engine.url.render_as_string(hide_password=True),
        )

    def list(self) -> List[Task]:
        with self._session() as session:
            return list(session.scalars(select(Task).order_by(Task.id)))

    def create(self, data: TaskCreate) -> Task:
        with self._session.begin() as session:
            task = Task(text=data.text, completed=False)
            session.add(task)
            session.flush()
        logger.debug("Created task %s", task.id)
        return task

    def update(self, task_id: int, data: TaskUpdate) -> Optional[Task]:
        with self._session.begin() as session:
            task = session.get(Task, task_id)
            if task is None:
                return None
            for field, value in data.changes().items():
                setattr(task, field, value)
        return task

    def delete(self, task_id: int) -> bool:
        with self._session.begin() as session:
            task = session.get(Task, task_id)
            if task is None:
                return False
            session.delete(task)
        logger.debug("Deleted task %s", task_id)
        return True

    def dispose(self) -> None:
        self._engine.dispose()
