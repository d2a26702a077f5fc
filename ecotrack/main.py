import logging
import os

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ecotrack.core.config import get_settings, validate_runtime_config
from ecotrack.database import init_db
from ecotrack.routes import activity_routes, admin_routes, auth_routes, page_routes
from ecotrack.services.uploads import UPLOADS_URL_PREFIX
from ecotrack.templating import STATIC_DIR, render

settings = get_settings()
validate_runtime_config(settings)

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

os.makedirs(settings.upload_dir, exist_ok=True)

app = FastAPI(title='EcoTrack')

app.mount('/static', StaticFiles(directory=str(STATIC_DIR)), name='static')
app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.upload_dir), name='uploads')


@app.on_event('startup')
def initialize_database() -> None:
    try:
        init_db()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return render(request, 'error_404.html', '404 - Page Not Found', status_code=404)
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    logger.error('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    return render(request, 'error_500.html', '500 - Internal Server Error', status_code=500)


app.include_router(auth_routes.router)
app.include_router(activity_routes.router)
app.include_router(admin_routes.router)
app.include_router(page_routes.router)
