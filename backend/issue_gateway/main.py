from contextlib import asynccontextmanager
from pathlib import Path

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from issue_gateway.adapters.github_client import GitHubClient
from issue_gateway.config.config import settings
from issue_gateway.errors import register_exception_handlers
from issue_gateway.routers import health, issues
from issue_gateway.services.markdown_renderer import MarkdownRenderer

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer(),
    ]
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.github_token:
        logger.warning("github_token_missing", hint="set GITHUB_TOKEN; requests to GitHub will be unauthenticated")

    # One client per process, shared by all requests.
    github_client = GitHubClient(token=settings.github_token, base_url=settings.github_api_url)
    app.state.github_client = github_client
    app.state.markdown_renderer = MarkdownRenderer()
    logger.info(
        "gateway_started",
        port=settings.port,
        github_api_url=settings.github_api_url,
        health_url=f"http://localhost:{settings.port}/api/health",
    )

    yield

    await github_client.close()
    logger.info("shutdown")


app = FastAPI(
    title="Issue Gateway",
    description="GitHub issue management API with markdown rendering",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(issues.router)


def mount_static_files(app: FastAPI, static_dir: str) -> bool:
    """Serve ``static_dir`` at ``/`` if it exists. Call after including the API routers."""
    if not Path(static_dir).is_dir():
        logger.info("static_dir_missing", static_dir=static_dir)
        return False
    app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    return True


mount_static_files(app, settings.static_dir)


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
