from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobsite.routes.demo import router as demo_router
from jobsite.routes.projects import router as projects_router
from jobsite.routes.reports import catalog_router as report_catalog_router
from jobsite.routes.reports import router as reports_router
from jobsite.services.config import get_settings
from jobsite.services.logger import setup_logging

settings = get_settings()
setup_logging(settings.log_level, settings.resolved_log_file)

app = FastAPI(title="Jobsite Project Reporting API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(report_catalog_router)
app.include_router(reports_router)
app.include_router(projects_router)
app.include_router(demo_router)


@app.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
