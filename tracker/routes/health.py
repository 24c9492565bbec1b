from fastapi import APIRouter, Depends

from tracker.database.store import IssueStore, get_store

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(store: IssueStore = Depends(get_store)):
    """Report whether the issue store is reachable."""
    if await store.ping():
        return {"status": "ok", "store": "up"}
    return {"status": "degraded", "store": "down"}
