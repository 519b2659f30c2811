# forum/main.py
import os
import sys
import time
import logging
from contextlib import asynccontextmanager
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from forum import models
from forum.database import engine
from forum.exceptions import ForumError
from forum.routers import friends, groups, topics, feed

load_dotenv()

# Logging Configuration
log_formatter = logging.Formatter(
    fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt="%d %B %Y %H:%M:%S"
)
logger = logging.getLogger()
logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))

log_stream_handler = logging.StreamHandler(sys.stdout)
log_stream_handler.setFormatter(log_formatter)
logger.addHandler(log_stream_handler)

if os.getenv("LOG_FILE"):
    log_file_handler = logging.FileHandler(os.getenv("LOG_FILE"))
    log_file_handler.setFormatter(log_formatter)
    logger.addHandler(log_file_handler)

logger.info("Application starting up...")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        models.Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully.")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}", exc_info=True)
        raise
    yield


app = FastAPI(title="Forum API", lifespan=lifespan)


# --- Request Logging Middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    client = f"{request.client.host}:{request.client.port}" if request.client else "unknown"
    logger.info(
        f"Request: {client} - "
        f"{request.method} {request.url.path} "
        f"Status: {response.status_code} "
        f"Processing Time: {process_time:.4f}s"
    )
    return response


@app.exception_handler(ForumError)
async def forum_error_handler(request: Request, exc: ForumError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(friends.router)
app.include_router(groups.router)
app.include_router(topics.router)
app.include_router(feed.router)


@app.get("/")
def read_root():
    return {"message": "Forum API"}

logger.info("Application setup complete.")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
