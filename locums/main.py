import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import ALLOWED_ORIGINS, LOG_LEVEL, ZERO_LENGTH_SHIFT_POLICY
from .domain.compliance import get_catalog
from .domain.compliance import router as compliance_router
from .domain.locations import router as locations_router
from .domain.shifts import router as shifts_router
from .shared.errors import InvalidRate, InvalidTimeFormat, ValidationError

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    catalog = get_catalog()
    logger.info(
        f"Compliance catalog {catalog.version}: {len(catalog.requirements)} requirements, "
        f"{len(catalog.roles)} roles"
    )
    logger.info(f"Zero-length shift policy: {ZERO_LENGTH_SHIFT_POLICY}")
    yield
    logger.info("Application shutting down...")


app = FastAPI(title="JoyJoy Locums Calculations API", version=__version__, lifespan=lifespan)


@app.exception_handler(ValidationError)
async def shift_validation_exception_handler(request: Request, exc: ValidationError):
    """Per-field messages so the UI can highlight each invalid input"""
    logger.warning(f"Validation error for {request.url.path}: {exc.errors}")
    return JSONResponse(status_code=422, content={"detail": str(exc), "errors": exc.errors})


@app.exception_handler(InvalidTimeFormat)
@app.exception_handler(InvalidRate)
async def value_exception_handler(request: Request, exc: ValueError):
    logger.warning(f"Invalid value for {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_errors(exc)})


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may hold exception instances that are not JSON serializable
    return [{k: v for k, v in error.items() if k != "ctx"} for error in exc.errors()]


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


# CORS Configuration
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(shifts_router)
app.include_router(compliance_router)
app.include_router(locations_router)


@app.get("/")
def root():
    return {"message": "JoyJoy Locums API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
