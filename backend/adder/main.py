import structlog
import uvicorn
from fastapi import FastAPI

from adder.routers import calculator

PORT = 3000

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.JSONRenderer(),
    ]
)

logger = structlog.get_logger(__name__)

app = FastAPI(title="Adder API", description="Adds two integers", version="0.1.0")

app.include_router(calculator.router)


def run() -> None:
    logger.info("adder_api_starting", url=f"http://localhost:{PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    run()
