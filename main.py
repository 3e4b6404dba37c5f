from fastapi import Depends, FastAPI
from fastapi.responses import HTMLResponse

from slugstore_app.api.v1 import mappings, redirect
from slugstore_app.config import Settings, get_settings
from slugstore_app.logging_config import setup_logging
from slugstore_app.middleware.logging import LoggingMiddleware
from slugstore_app.web.instructions import render_instructions

settings = get_settings()
setup_logging(settings.log_level)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener backed by a key-value store",
    debug=settings.debug
)
app.add_middleware(LoggingMiddleware)


@app.get("/", response_class=HTMLResponse)
def read_root(settings: Settings = Depends(get_settings)):
    """Instructions page"""
    return render_instructions(settings.app_name, settings.contact_email)


@app.get("/health")
def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
# redirect holds the /{slug} catch-all, so it goes last
app.include_router(mappings.router)
app.include_router(redirect.router)
