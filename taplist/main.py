import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from taplist.config import settings
from taplist.core.rate_limit import limiter
from taplist.core.realtime import RealtimeBridge, change_feed
from taplist.modules.auth import routes as auth_routes
from taplist.modules.beverages import routes as beverages_routes
from taplist.modules.taps import routes as taps_routes
from taplist.modules.display_settings import routes as display_settings_routes
from taplist.modules.display import routes as display_routes
from taplist.modules.users import routes as users_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(auth_routes.router, prefix="/api/v1")
app.include_router(beverages_routes.router, prefix="/api/v1")
app.include_router(taps_routes.router, prefix="/api/v1")
app.include_router(display_settings_routes.router, prefix="/api/v1")
app.include_router(display_routes.router, prefix="/api/v1")
app.include_router(users_routes.router, prefix="/api/v1")

realtime_bridge = None


@app.on_event("startup")
async def startup_event():
    global realtime_bridge
    logger.info("Application startup")

    if settings.realtime_enabled:
        realtime_bridge = RealtimeBridge(
            change_feed,
            settings.supabase_url,
            settings.supabase_service_role_key or settings.supabase_key,
        )
        try:
            await realtime_bridge.start()
        except Exception as e:
            # Display clients still get changes made through this instance
            logger.error(f"Realtime bridge failed to start: {e}")
            realtime_bridge = None


@app.on_event("shutdown")
async def shutdown_event():
    if realtime_bridge is not None:
        await realtime_bridge.stop()
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": "Welcome to taplist-backend", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: extend here with Supabase checks if needed."""
    return {"status": "ready", "display_clients": change_feed.subscriber_count}
