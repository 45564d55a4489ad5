from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import os
from dotenv import load_dotenv

# Load .env variables
load_dotenv()

# Configure base logging
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger("tripbook")

from tripbook.routers import auth, trips
from tripbook.database import SessionLocal
from tripbook.exceptions import TripBookError
from tripbook.init_db import seed_database
import uvicorn

API_PREFIX = os.getenv("API_PREFIX", "/api")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

if os.getenv("SEED_DATABASE", "false").lower() in {"1", "true", "yes"}:
    logger.info("Seeding database with demo user and sample trips...")
    db = SessionLocal()
    try:
        seed_database(db)
    finally:
        db.close()

app = FastAPI(
    title="TripBook API",
    description="API for listing, creating and booking trips",
    version="1.0.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(
        "%s %s - Origin: %s",
        request.method,
        request.url.path,
        request.headers.get("origin"),
    )
    return await call_next(request)


# Include routers
app.include_router(auth.router, prefix=f"{API_PREFIX}/auth", tags=["authentication"])
app.include_router(trips.router, prefix=f"{API_PREFIX}/trips", tags=["trips"])


@app.get("/")
def read_root():
    return {"message": "Welcome to TripBook API"}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(TripBookError)
async def tripbook_exception_handler(request: Request, exc: TripBookError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Global unhandled exception handler -> logs ERROR
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error | path=%s | method=%s | client=%s",
        request.url.path,
        request.method,
        request.client.host if request.client else "unknown",
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


if __name__ == "__main__":
    uvicorn.run(
        "tripbook.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "5000")),
        reload=True,
    )
