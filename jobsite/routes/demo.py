from __future__ import annotations

from fastapi import APIRouter

from jobsite.services.project_store import project_store

router = APIRouter(prefix="/api/demo", tags=["demo"])


@router.post("/reset")
async def reset_demo() -> dict[str, str]:
    await project_store.reset()
    projects = await project_store.list_projects()
    return {
        "status": "ok",
        "message": f"Reset complete: {len(projects)} project(s) restored from seed data",
    }
