"""Integer addition and the liveness probe."""

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from adder.schemas import AddResponse, ErrorResponse

router = APIRouter(tags=["calculator"])
logger = structlog.get_logger(__name__)

PING_TEXT = "Hello Calculator"
INVALID_OPERANDS = "Both a and b must be integers."


def as_integer(value: object) -> int | None:
    """Return ``value`` as an int if it is an integer, else None.

    Booleans are rejected even though ``bool`` subclasses ``int``. Floats with an
    integral value (``4.0``) are accepted since JSON has a single number type.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


@router.post("/api/add", response_model=AddResponse, responses={400: {"model": ErrorResponse}})
async def add(request: Request):
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    if not isinstance(payload, dict):
        return _invalid_operands()
    a = as_integer(payload.get("a"))
    b = as_integer(payload.get("b"))
    if a is None or b is None:
        return _invalid_operands()

    # Python ints are arbitrary precision: no overflow or wraparound.
    return AddResponse(sum=a + b)


@router.get("/ping", response_class=PlainTextResponse)
async def ping() -> str:
    logger.info("ping", reply=PING_TEXT)
    return PING_TEXT


def _invalid_operands() -> JSONResponse:
    return JSONResponse(
        ErrorResponse(error=INVALID_OPERANDS).model_dump(),
        status_code=status.HTTP_400_BAD_REQUEST,
    )
