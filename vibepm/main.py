# vibepm/main.py

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import os
import logging

from vibepm.api.activity import router as activity_router
from vibepm.api.ai import router as ai_router
from vibepm.api.data import router as data_router
from vibepm.api.project import router as project_router
from vibepm.api.prompt import router as prompt_router
from vibepm.api.quick_capture import router as quick_capture_router
from vibepm.api.settings import router as settings_router
from vibepm.api.step import router as step_router
from vibepm.api.task import router as task_router

from vibepm.core.settings import settings
from vibepm.core.exceptions import NotFoundError, ValidationError
from vibepm.database import init_db

# Логирование
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("VibePM")

app = FastAPI(
    title="VibePM API",
    version="1.0.0",
    description="Personal project planning: ideas, projects, tasks and AI prompts",
)

# Middlewares
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Роутеры
app.include_router(activity_router)
app.include_router(ai_router)
app.include_router(data_router)
app.include_router(project_router)
app.include_router(prompt_router)
app.include_router(quick_capture_router)
app.include_router(settings_router)
app.include_router(step_router)
app.include_router(task_router)

# Health check
@app.get("/health", tags=["Health"])
def health():
    return {"ok": True}

@app.on_event("startup")
async def startup_event():
    init_db()
    logger.info("Starting VibePM API")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Stopping VibePM API")

# Все ошибки отдаются в одном формате: {"error": "..."}

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)

@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})

@app.exception_handler(NotFoundError)
async def not_found_exception_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"error": str(exc)})

@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "vibepm.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=settings.DEBUG,
    )
