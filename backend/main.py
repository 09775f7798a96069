from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from init_db import init_database
from api import books, members, loans
from config.settings import settings
from utils.logging_utils import StructuredLogger, clear_logging_context, set_logging_context
import logging
from logging.handlers import RotatingFileHandler
import sys
import uuid

SERVICE_NAME = "Library Lending API"
SERVICE_VERSION = "1.0.0"


def setup_logging():
    """Configure the root logger with a rotating file handler and the console"""
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_file = settings.log_dir / "backend.log"
    level = logging.getLevelName(settings.log_level)

    log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # File handler with rotation (10MB per file, keep 5 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_formatter)
    file_handler.setLevel(level)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)
    return log_file


log_file = setup_logging()
logger = logging.getLogger(__name__)
request_logger = StructuredLogger("requests")
logger.info(f"Logging initialized: {log_file}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    logger.info("Initializing database...")
    init_database()
    logger.info(f"🚀 {SERVICE_NAME} ready")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=SERVICE_NAME,
    description="Catalog, membership and lending service for a library",
    version=SERVICE_VERSION,
    lifespan=lifespan
)

# Configure CORS - allow all origins for network accessibility
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Tag every log line written while serving a request with its request id"""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    set_logging_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        response = await call_next(request)
        request_logger.debug("Request completed", extra={"status_code": response.status_code})
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        clear_logging_context()


# Include API routers
app.include_router(books.router, prefix="/api", tags=["books"])
app.include_router(members.router, prefix="/api", tags=["members"])
app.include_router(loans.router, prefix="/api", tags=["loans"])


@app.get("/health")
@app.get("/api/health")
def health_check():
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"🚀 Starting {SERVICE_NAME} on http://{settings.host}:{settings.port}...")
    uvicorn.run(app, host=settings.host, port=settings.port)
