import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tracker.database import models
from tracker.database.config import Base, build_engine, build_session_factory
from tracker.database.store import IssueStore
from tracker.exceptions import StoreError
from tracker.schemas import IssueResponse, ProjectResponse

logger = logging.getLogger(__name__)


class SQLIssueStore(IssueStore):
    """
    Implementation of IssueStore using SQLAlchemy's async engine.

    Projects and issues live in the `projects` and `issues` tables. Every
    operation runs in its own session.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = build_engine(database_url, echo=echo)
        self.session_factory = build_session_factory(self.engine)

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self.session_factory() as session:
                yield session
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(str(exc)) from exc

    async def start(self) -> None:
        # Create tables
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError):
            logger.exception("Could not create issue store tables")
            raise

        logger.info("Issue store ready", extra={"dialect": self.engine.dialect.name})

    async def close(self) -> None:
        await self.engine.dispose()

    async def ping(self) -> bool:
        try:
            async with self._session() as session:
                await session.execute(text("SELECT 1"))
        except StoreError:
            logger.warning("Issue store ping failed", exc_info=True)
            return False
        return True

    async def find_project_by_name(self, name: str) -> Optional[ProjectResponse]:
        async with self._session() as session:
            result = await session.execute(
                select(models.Project).where(models.Project.name == name).limit(1)
            )
            project = result.scalars().first()

        if not project:
            return None
        return ProjectResponse.model_validate(project)

    async def create_project(self, name: str) -> ProjectResponse:
        project = models.Project(id=str(uuid.uuid4()), name=name)

        async with self._session() as session:
            session.add(project)
            await session.commit()
            await session.refresh(project)

        return ProjectResponse.model_validate(project)

    async def find_issues(
        self, project_id: str, criteria: dict[str, Any]
    ) -> Optional[list[IssueResponse]]:
        stmt = select(models.Issue).where(models.Issue.project_id == project_id)
        for attribute, value in criteria.items():
            stmt = stmt.where(getattr(models.Issue, attribute) == value)
        stmt = stmt.order_by(models.Issue.created_on, models.Issue.id)

        async with self._session() as session:
            result = await session.execute(stmt)
            issues = result.scalars().all()

        return [IssueResponse.model_validate(issue) for issue in issues]

    async def create_issue(self, fields: dict[str, Any]) -> IssueResponse:
        issue = models.Issue(id=str(uuid.uuid4()), **fields)

        async with self._session() as session:
            session.add(issue)
            await session.commit()
            await session.refresh(issue)

        return IssueResponse.model_validate(issue)

    async def update_issue(
        self, issue_id: str, changes: dict[str, Any]
    ) -> Optional[IssueResponse]:
        async with self._session() as session:
            issue = await session.get(models.Issue, issue_id)
            if not issue:
                return None

            for key, value in changes.items():
                setattr(issue, key, value)

            await session.commit()
            await session.refresh(issue)

        return IssueResponse.model_validate(issue)

    async def delete_issue(self, issue_id: str) -> Optional[IssueResponse]:
        async with self._session() as session:
            issue = await session.get(models.Issue, issue_id)
            if not issue:
                return None

            deleted = IssueResponse.model_validate(issue)
            await session.delete(issue)
            await session.commit()

        return deleted
