import logging

from fastapi import Depends, FastAPI
from starlette.middleware.sessions import SessionMiddleware

from tinyapp.api.errors import register_exception_handlers
from tinyapp.api.v1 import auth, redirect, urls
from tinyapp.config import settings
from tinyapp.dependencies import ensure_visitor_id

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

# Create FastAPI app; every request gets a visitor token in its session
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener with accounts, link ownership and visit stats",
    debug=settings.debug,
    dependencies=[Depends(ensure_visitor_id)]
)

# Signed cookie session carrying user_id and visitor_id
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.session_cookie,
    max_age=settings.session_max_age,
)

register_exception_handlers(app)


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
app.include_router(auth.router, prefix="/api/v1")
app.include_router(urls.router, prefix="/api/v1")
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
