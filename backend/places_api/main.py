from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from places_api.core.config import settings
from places_api.core.db_connection import db_connection
from places_api.core.errors import (
    HttpError,
    http_error_handler,
    not_found_route_handler,
    request_validation_handler,
    unhandled_error_handler,
)
from places_api.routes.places_route import router as places_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    db_connection.close()


app = FastAPI(title="Places API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
)

app.add_exception_handler(HttpError, http_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(StarletteHTTPException, not_found_route_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.include_router(places_router)
app.mount("/uploads/images", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="images")

# --- Root Endpoint ---
@app.get("/")
async def root():
    return {
        "message": "Welcome to Places API",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "places": "/api/places",
            "docs": "/docs"
        },
        "version": "1.0.0"
    }

# --- Health Check ---
@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "Places API"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("places_api.main:app", host="0.0.0.0", port=5000, reload=True)
