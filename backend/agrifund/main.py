# backend/agrifund/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from .database import engine
from . import models
from .api import projects, investments, users, investors, contact, admin
from .utils.logging import api_logger
from .config import settings

# Create all tables on startup
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="AgriFund API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/uploads", StaticFiles(directory=str(settings.UPLOADS_PATH)), name="uploads")

# Include routers
app.include_router(projects.router)
app.include_router(investments.router)
app.include_router(users.router)
app.include_router(investors.router)
app.include_router(contact.router)
app.include_router(admin.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    api_logger.warning("Request validation failed", extra={
        "path": request.url.path,
        "errors": errors
    })
    return JSONResponse(status_code=400, content={"detail": "Validation error", "errors": errors})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    api_logger.error("Unhandled error", extra={"path": request.url.path}, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.get("/")
async def root():
    return {"message": "AgriFund API is running"}
