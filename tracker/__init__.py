"""FastAPI Project Issue Tracker.

A small API for tracking issues grouped by project name:
- One resource route, /api/issues/{project}, for list/create/update/delete
- Errors reported in the JSON body, always with HTTP 200
- Pluggable issue store (SQLAlchemy async, or in-memory)
"""
