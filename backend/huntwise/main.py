import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from huntwise.config import settings
from huntwise.constants import PREFLIGHT_HEADERS
from huntwise.errors import InputValidationError
from huntwise.http import init_http, close_http
from huntwise.routers import predict

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("huntwise.main")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Shared HTTP client lives for the whole process."""
    await init_http()
    log.info("HTTP client initialized")
    yield
    await close_http()
    log.info("HTTP client closed")

# Single FastAPI instance
app = FastAPI(
    title="HuntWise Prediction API",
    description="Game-activity prediction from moon, weather, season and harvest history",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Registered after CORSMiddleware so it sits outside it: /predict preflights
# (with or without Origin) never reach the CORS handler's "OK" reply.
@app.middleware("http")
async def predict_preflight(request: Request, call_next):
    if request.method == "OPTIONS" and request.url.path.startswith("/predict"):
        return Response(status_code=200, headers=dict(PREFLIGHT_HEADERS))
    return await call_next(request)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start
    log.info("%s %s -> %d (%.3fs)", request.method, request.url.path, response.status_code, elapsed)
    response.headers["X-Process-Time"] = f"{elapsed:.4f}"
    return response

@app.exception_handler(InputValidationError)
async def input_validation_handler(request: Request, exc: InputValidationError):
    log.info("Rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"error": str(exc)})

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    msg = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": msg})

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})

app.include_router(predict.router)

# API endpoints
@app.get("/")
async def root():
    return {"ok": True, "service": "HuntWise Prediction API", "version": app.version}

@app.get("/health")
async def health():
    return {
        "ok": True,
        "providers": {
            "geocode": settings.GEOCODE_URL,
            "weather": settings.WEATHER_URL,
            "moon": settings.MOON_URL,
            "history": "configured" if settings.history_configured else "not configured",
        },
        "timeout_sec": settings.PROVIDER_TIMEOUT_SEC,
        "history_window_days": settings.HISTORY_WINDOW_DAYS,
        "weights": {
            "moon": settings.SCORE_WEIGHT_MOON,
            "weather": settings.SCORE_WEIGHT_WEATHER,
            "season": settings.SCORE_WEIGHT_SEASON,
            "history": settings.SCORE_WEIGHT_HISTORY,
        },
    }

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("huntwise.main:app", host="0.0.0.0", port=8000)
