import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from taskboard.auth.rate_limit import LoginThrottle
from taskboard.core import config
from taskboard.core.error_handlers import register_exception_handlers
from taskboard.database import init_schema
from taskboard.routes import auth_routes, task_routes, user_routes
from taskboard.schemas.base import MessageEnvelope

logger = logging.getLogger(__name__)


def create_app(login_throttle: LoginThrottle | None = None) -> FastAPI:
    app = FastAPI(title='Taskboard API')

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    app.state.login_throttle = login_throttle or LoginThrottle(
        max_attempts=config.LOGIN_RATE_LIMIT_MAX_ATTEMPTS,
        window_seconds=config.LOGIN_RATE_LIMIT_WINDOW_SECONDS,
    )

    @app.on_event('startup')
    def initialize_database() -> None:
        config.validate_runtime_config()
        try:
            init_schema()
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')

    @app.get('/health', response_model=MessageEnvelope)
    def health():
        return MessageEnvelope(message='Server is running')

    app.include_router(auth_routes.router, prefix='/auth')
    app.include_router(user_routes.router, prefix='/users')
    app.include_router(task_routes.router, prefix='/tasks')

    register_exception_handlers(app)
    return app


logging.basicConfig(level=config.LOG_LEVEL)
app = create_app()
