from sqlalchemy import Boolean, Column, DateTime, String

from tracker.database.config import Base


class Project(Base):
    __tablename__ = "projects"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)


class Issue(Base):
    __tablename__ = "issues"

    id = Column(String, primary_key=True, index=True)
    # Back-reference only; projects do not track their issues
    project_id = Column(String, nullable=False, index=True)

    issue_title = Column(String, nullable=False)
    issue_text = Column(String, nullable=False)
    created_by = Column(String, nullable=False)
    assigned_to = Column(String, nullable=False, default="")
    status_text = Column(String, nullable=False, default="")
    open = Column(Boolean, nullable=False, default=True)

    created_on = Column(DateTime(timezone=True), nullable=False)
    updated_on = Column(DateTime(timezone=True), nullable=False)
