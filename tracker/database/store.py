from typing import Any, Optional

from fastapi import Request

from tracker.schemas import IssueResponse, ProjectResponse


class IssueStore:
    """Abstract base for the document store behind the issues route.

    Holds two logical collections, projects and issues. Implementations
    raise StoreError when the backend fails; a lookup that finds nothing
    returns None instead of raising.
    """

    async def start(self) -> None:
        """Prepare the backend (called once at application startup)."""

    async def close(self) -> None:
        """Release backend resources (called once at application shutdown)."""

    async def ping(self) -> bool:
        raise NotImplementedError

    async def find_project_by_name(self, name: str) -> Optional[ProjectResponse]:
        raise NotImplementedError

    async def create_project(self, name: str) -> ProjectResponse:
        raise NotImplementedError

    async def find_issues(
        self, project_id: str, criteria: dict[str, Any]
    ) -> Optional[list[IssueResponse]]:
        """
        Issues of a project whose attributes equal every value in criteria.

        Args:
            project_id: Owning project id
            criteria: Issue attribute name -> exact value

        Returns:
            Matching issues in insertion order
        """
        raise NotImplementedError

    async def create_issue(self, fields: dict[str, Any]) -> IssueResponse:
        raise NotImplementedError

    async def update_issue(
        self, issue_id: str, changes: dict[str, Any]
    ) -> Optional[IssueResponse]:
        """Merge changes into an issue; returns None if the id does not exist."""
        raise NotImplementedError

    async def delete_issue(self, issue_id: str) -> Optional[IssueResponse]:
        """Remove an issue; returns the removed issue, or None if absent."""
        raise NotImplementedError


# Dependency to get the store attached at startup
def get_store(request: Request) -> IssueStore:
    return request.app.state.store
