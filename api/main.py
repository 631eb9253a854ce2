import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.dependencies import cleanup_dependencies, deps, init_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import webhook
from config.logging_config import setup_logging
from config.settings import get_settings

settings = get_settings()
setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info('Starting Currency Converter Bot...')

	init_dependencies(settings)

	if deps.db is None:
		raise RuntimeError('Database not initialized')
	await deps.db.create_tables()
	logger.info('Database tables created')

	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

app.include_router(webhook.router)
register_exception_handlers(app)


if __name__ == '__main__':
	import uvicorn

	logger.info(f'Starting server on {settings.HOST}:{settings.PORT}')
	uvicorn.run('api.main:app', host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
