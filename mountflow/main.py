import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request

from .api import catalog, workflows
from .dependencies import get_settings, get_workflow_registry
from .logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    settings = get_settings()
    setup_logging(settings)
    logging.info("mountflow starting up...")
    logging.info(f"Default mount category: {settings.default_mount_category}")
    logging.info(f"Wizard feature: {settings.wizard_feature}")

    yield

    # Open workflows are torn down so unsaved mounts never outlive the process
    closed = await get_workflow_registry().close_all()
    logging.info(f"mountflow shutting down, closed {closed} open workflow(s)")


app = FastAPI(
    title="mountflow",
    description="Mount-and-configure workflow for secret engines and auth methods",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logging.debug(
        f"Incoming request: {request.method} {request.url.path}",
        extra={"operation": "http_request", "method": request.method, "path": request.url.path},
    )
    response = await call_next(request)
    logging.debug(
        f"Response: {response.status_code}",
        extra={"operation": "http_response", "status_code": response.status_code},
    )
    return response


app.include_router(workflows.router)
app.include_router(catalog.router)


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "mountflow"}


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run("mountflow.main:app", host=settings.api_host, port=settings.api_port, log_level="info")
