from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from celery import Celery
from celery.schedules import crontab
from contextlib import asynccontextmanager

from emprecords.core import settings, logger
from emprecords.core.discord_logger import send_discord_alert
from emprecords.core.exceptions import DomainError
from emprecords.database import init_db
from emprecords.routers import api_router


# --- Configuración de Celery ---
celery_app = Celery(
    'tasks',
    broker=settings.URL_DATABASE_REDIS,
    backend=settings.URL_DATABASE_REDIS
)

celery_app.conf.update(
    task_serializer='json',
    result_serializer='json',
    accept_content=['json'],
    broker_connection_retry_on_startup=True
)


# --- Definición de Tareas Programadas (Celery Beat) ---
@celery_app.on_after_configure.connect
def setup_periodic_tasks(sender, **kwargs):
    """
    Configura las tareas que se ejecutarán periódicamente.
    """
    logger.info("Configurando tareas periódicas de Celery...")

    # Limpiar tokens de reseteo expirados (todos los días, 3 AM)
    sender.add_periodic_task(
        crontab(minute='0', hour='3'),
        cleanup_expired_reset_tokens_job.s(),
        name='Limpiar tokens de reseteo expirados'
    )


@celery_app.task
def cleanup_expired_reset_tokens_job():
    """Elimina tokens de reseteo vencidos. La validez ya se revisa al leer."""
    from emprecords.database import SessionLocal
    from emprecords.services import purge_expired_reset_tokens

    db = SessionLocal()
    try:
        deleted = purge_expired_reset_tokens(db)
        logger.info(f"🧹 Limpieza: {deleted} tokens de reseteo eliminados")
        return deleted
    finally:
        db.close()


# --- Configuración de FastAPI ---
api_description = """
API de administración de expedientes de empleados.

* Registro, inicio de sesión con token Bearer (1 hora) y recuperación de contraseña.
* Alta, consulta, edición y baja de empleados (maestro + detalle).
"""

@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- CÓDIGO DE ARRANQUE (Startup) ---
    logger.info("🚀 Iniciando API EmpRecords...")
    init_db()

    yield

    # --- CÓDIGO DE CIERRE (Shutdown) ---
    logger.info("🛑 Deteniendo API EmpRecords...")


app = FastAPI(
    title="EmpRecords API",
    description=api_description,
    version="1.0.0",
    lifespan=lifespan
)


# --- Middleware CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Cabeceras de seguridad ---
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-XSS-Protection": "1; mode=block",
}

@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers[header] = value
    return response


# --- Routers ---
app.include_router(api_router)


@app.get("/", tags=["Root"])
def read_root():
    return {"message": "Bienvenido a la API de EmpRecords v1"}


# --- Manejo global de errores ---
def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )

@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    if exc.status_code >= 500:
        logger.error(f"Error {exc.status_code} en {request.method} {request.url.path}: {exc.message}")
    return _error_response(exc.status_code, exc.message, headers)

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.warning(f"Petición inválida en {request.method} {request.url.path}: {len(errors)} error(es)")

    message = "Missing required fields."
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        if first.get("type") != "missing":
            message = f"Invalid value for '{field}': {first.get('msg')}." if field else f"{first.get('msg')}."
    return _error_response(400, message)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    message = f"Error 500 en {request.url.path}: {exc}"
    logger.exception(message)
    send_discord_alert(message, level="CRITICAL")
    return _error_response(500, "Internal server error.")
