# mealcart/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn

from mealcart.api import ROUTERS
from mealcart.data.database import Base, init_db
from mealcart.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database")
    init_db()
    logger.info(f"Tables ready: {list(Base.metadata.tables.keys())}")
    yield


async def validation_error_handler(request: Request, exc: RequestValidationError):
    # malformed input is a plain 400 for this API
    errors = exc.errors()
    message = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'][1:])}: {err['msg']}" for err in errors
    )
    return JSONResponse(status_code=400, content={"detail": message or "Invalid input"})


def create_app(with_lifespan: bool = True) -> FastAPI:
    app = FastAPI(
        title="Meal Cart Service",
        version="1.0.0",
        lifespan=lifespan if with_lifespan else None,
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Include routers
    for router in ROUTERS:
        app.include_router(router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
