import logging
from app.config import get_settings
from app.routes import ping, tenders, bids
from app.database import create_db_and_tables
from app.errors import ServiceError
import uvicorn
from fastapi.exceptions import RequestValidationError
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi import status

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, version=settings.VERSION)


@app.get("/")
async def root():
    return JSONResponse({
        "message": "Tender management API",
        "version": settings.VERSION,
        "available_endpoints": f"start with {settings.API_PREFIX}, e.g. {settings.API_PREFIX}/tenders"
    })


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    first_error = exc.errors()[0]
    error_message = first_error.get("msg", "invalid request")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "reason": error_message
        },
    )


@app.exception_handler(ServiceError)
async def service_exception_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.http_status, content={"reason": exc.reason})


@app.on_event("startup")
async def startup_event():
    if settings.CREATE_SCHEMA:
        create_db_and_tables()
    logger.info("%s is running", settings.APP_NAME)

app.include_router(ping.router, prefix=settings.API_PREFIX)
app.include_router(tenders.router, prefix=settings.API_PREFIX)
app.include_router(bids.router, prefix=settings.API_PREFIX)

if __name__ == "__main__":
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)
