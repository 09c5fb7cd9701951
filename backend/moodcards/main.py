"""
MoodCards FastAPI Application Entry Point
FastAPI 应用入口
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from moodcards import __version__
from moodcards.config import settings
from moodcards.exceptions import ErrorKind, FeatureError, TranscriptError
from moodcards.llm_gateway import get_gateway
from moodcards.routers import (
    cards_router,
    daily_fortune_router,
    diagnosis_router,
    personality_router,
)
from moodcards.utils.logger import get_logger

logger = get_logger(__name__)

FEATURE_ERROR_STATUS = {
    ErrorKind.CONFIG: 500,
    ErrorKind.TIMEOUT: 504,
    ErrorKind.INSUFFICIENT_BALANCE: 402,
    ErrorKind.AUTH: 502,
    ErrorKind.RATE_LIMIT: 429,
    ErrorKind.NOT_FOUND: 502,
    ErrorKind.UPSTREAM: 502,
    ErrorKind.NETWORK: 502,
    ErrorKind.MALFORMED_RESPONSE: 502,
    ErrorKind.PARSE: 502,
    ErrorKind.VALIDATION: 502,
    ErrorKind.UNKNOWN: 500,
}

# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])

# Create FastAPI application / 创建 FastAPI 应用
app = FastAPI(
    title="MoodCards API",
    description="LLM-Powered Mood & Fortune Cards / 大模型驱动的情绪与运势卡片",
    version=__version__,
    debug=settings.debug,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(FeatureError)
async def feature_error_handler(request: Request, exc: FeatureError):
    """Classified pipeline failures carry a message that is safe to show."""
    return JSONResponse(
        status_code=FEATURE_ERROR_STATUS.get(exc.kind, 500),
        content={"error": exc.kind.value, "message": exc.message, "retryable": exc.retryable},
    )


@app.exception_handler(TranscriptError)
async def transcript_error_handler(request: Request, exc: TranscriptError):
    return JSONResponse(
        status_code=422,
        content={"error": "transcript", "message": str(exc), "retryable": False},
    )


# Global exception handler, keeps internal details out of responses
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and return a safe 500 response."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Configure CORS / 配置跨域
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers / 注册路由
# Dual mount: "/" for the dev proxy (which strips /api), "/api" for direct calls
routers = [
    cards_router,
    diagnosis_router,
    personality_router,
    daily_fortune_router,
]

for router in routers:
    app.include_router(router)
    app.include_router(router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint / 健康检查"""
    return {
        "status": "ok",
        "version": app.version,
        "llm_configured": settings.llm_configured,
    }


@app.on_event("startup")
async def on_startup():
    if not settings.llm_configured:
        logger.warning("DEEPSEEK_API_KEY is not set; card generation will fail until it is configured")
    logger.info("MoodCards API %s started (model=%s)", app.version, settings.llm_model)


@app.on_event("shutdown")
async def on_shutdown():
    await get_gateway().aclose()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "moodcards.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
