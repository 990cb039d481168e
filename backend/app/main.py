"""
FastAPI application entrypoint.
Run with: uvicorn app.main:app --reload --port 8000

API base path: /api
  - Auth:     POST /api/login, GET /api/logout, GET /api/auth/user
  - Tests:    POST /api/tests/generate, POST /api/tests, GET /api/tests/history, GET /api/tests/stats, GET /api/tests/{id}
  - Colleges: GET /api/colleges, POST /api/colleges/search, GET /api/colleges/{id}
  - Teachers: GET /api/teachers, GET /api/teachers/{id}
  - Bookings: POST /api/bookings, GET /api/bookings

Errors are rendered as {"message": ...}; internal detail is logged, never returned.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import DEFAULT_SESSION_SECRET, settings
from app.errors import PersistenceError, WiselyError
from app.llm import SUPPORTED_PROVIDERS, llm_provider
from app.api.auth import router as auth_router
from app.api.bookings import router as bookings_router
from app.api.colleges import router as colleges_router
from app.api.teachers import router as teachers_router
from app.api.tests import router as tests_router

logger = logging.getLogger("app.main")

app = FastAPI(
    title="Wisely API",
    description="English test generator, college and teacher directories, teacher bookings.",
    version="0.1.0",
)

_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins if _origins else ["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(tests_router)
app.include_router(colleges_router)
app.include_router(teachers_router)
app.include_router(bookings_router)


@app.exception_handler(WiselyError)
def handle_wisely_error(request: Request, exc: WiselyError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s: %s", request.method, request.url.path, type(exc).__name__, exc, exc_info=exc.__cause__)
        message = exc.public_message
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        message = exc.message
    return JSONResponse(status_code=exc.status_code, content={"message": message})


@app.exception_handler(RequestValidationError)
def handle_request_validation(request: Request, exc: RequestValidationError):
    """Missing or malformed fields -> 400 with the first problem spelled out."""
    errors = exc.errors()
    parts = []
    for err in errors[:3]:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        parts.append(f"{loc}: {err.get('msg', 'invalid')}" if loc else err.get("msg", "invalid"))
    message = "; ".join(parts) or "Invalid request"
    logger.info("%s %s -> 400: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(SQLAlchemyError)
def handle_db_error(request: Request, exc: SQLAlchemyError):
    logger.exception("%s %s database error: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"message": PersistenceError.public_message})


@app.exception_handler(Exception)
def handle_unexpected(request: Request, exc: Exception):
    logger.exception("%s %s unhandled error: %s", request.method, request.url.path, exc)
    message = "Internal server error"
    if settings.debug:
        message = f"Internal server error: {type(exc).__name__}"
    return JSONResponse(status_code=500, content={"message": message})


@app.on_event("startup")
def startup():
    """Fail fast on unsafe production config or an unsupported LLM provider, log oracle key status, create/seed the database, purge stale sessions."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if settings.is_production:
        if (settings.session_secret or "").strip() == DEFAULT_SESSION_SECRET:
            logger.critical("SESSION_SECRET must be set in production. Set SESSION_SECRET in env or .env.")
            raise RuntimeError("SESSION_SECRET must be set in production. Set SESSION_SECRET in env or .env.")
        if (settings.identity_provider or "").strip().lower() == "dev":
            logger.critical("IDENTITY_PROVIDER=dev is not allowed in production.")
            raise RuntimeError("IDENTITY_PROVIDER=dev is not allowed in production.")
    try:
        provider = llm_provider()
    except ValueError as e:
        logger.critical("%s. Set LLM_PROVIDER to one of: %s", e, ", ".join(SUPPORTED_PROVIDERS))
        raise RuntimeError(str(e)) from e
    key = settings.openai_api_key if provider == "openai" else settings.gemini_api_key
    if (key or "").strip():
        logger.info("Text oracle: %s key loaded (model=%s).", provider, settings.active_llm_model)
    else:
        logger.warning("Text oracle: no %s API key; using mock generation.", provider)
    from app.database import SessionLocal, init_db
    from app.services.auth import purge_expired_sessions
    try:
        init_db()
        db = SessionLocal()
        try:
            purge_expired_sessions(db)
        finally:
            db.close()
    except SQLAlchemyError as e:
        logger.critical("Startup: database not ready (run: alembic upgrade head): %s", e)
        raise


@app.get("/", response_class=HTMLResponse)
def root():
    """Root: minimal page so the app 'loads' in browser; links to API docs."""
    return """
    <!DOCTYPE html>
    <html>
    <head><meta charset="utf-8"><title>Wisely API</title></head>
    <body style="font-family: system-ui; max-width: 600px; margin: 2rem auto; padding: 1rem;">
    <h1>Wisely API</h1>
    <p>This is the <strong>API server</strong>. It returns JSON, not the web app.</p>
    <ul>
    <li><a href="/docs">OpenAPI docs (Swagger)</a></li>
    <li><a href="/redoc">ReDoc</a></li>
    <li>Health: <a href="/health">/health</a></li>
    </ul>
    </body>
    </html>
    """


@app.get("/health")
def health():
    """Health check (JSON)."""
    return {"status": "ok", "message": "Wisely API"}
