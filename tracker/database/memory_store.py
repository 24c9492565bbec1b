import uuid
from typing import Any, Optional

from tracker.database.store import IssueStore
from tracker.schemas import IssueResponse, ProjectResponse


class MemoryIssueStore(IssueStore):
    """
    Issue store kept in process memory.

    Used by the test-suite and for local runs with STORE_BACKEND=memory.
    Documents are held as plain dicts; callers always get copies.
    """

    def __init__(self):
        self.projects: dict[str, dict[str, Any]] = {}
        self.issues: dict[str, dict[str, Any]] = {}

    async def ping(self) -> bool:
        return True

    async def find_project_by_name(self, name: str) -> Optional[ProjectResponse]:
        for project in self.projects.values():
            if project["name"] == name:
                return ProjectResponse.model_validate(project)
        return None

    async def create_project(self, name: str) -> ProjectResponse:
        project = {"id": str(uuid.uuid4()), "name": name}
        self.projects[project["id"]] = project
        return ProjectResponse.model_validate(project)

    async def find_issues(
        self, project_id: str, criteria: dict[str, Any]
    ) -> Optional[list[IssueResponse]]:
        return [
            IssueResponse.model_validate(issue)
            for issue in self.issues.values()
            if issue["project_id"] == project_id
            and all(issue.get(key) == value for key, value in criteria.items())
        ]

    async def create_issue(self, fields: dict[str, Any]) -> IssueResponse:
        issue = {**fields, "id": str(uuid.uuid4())}
        self.issues[issue["id"]] = issue
        return IssueResponse.model_validate(issue)

    async def update_issue(
        self, issue_id: str, changes: dict[str, Any]
    ) -> Optional[IssueResponse]:
        issue = self.issues.get(issue_id)
        if issue is None:
            return None

        issue.update(changes)
        return IssueResponse.model_validate(issue)

    async def delete_issue(self, issue_id: str) -> Optional[IssueResponse]:
        issue = self.issues.pop(issue_id, None)
        if issue is None:
            return None
        return IssueResponse.model_validate(issue)
