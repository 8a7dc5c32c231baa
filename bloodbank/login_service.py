"""Login service: account registration and bearer-token issuance.

Building the app fails with ``ConfigurationFailure`` when ``JWT_SECRET`` is
missing, so a misconfigured process never starts serving.

Usage:
    python -m bloodbank.login_service
"""
import logging
from datetime import timedelta

import uvicorn
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from bloodbank.auth.service import AuthService
from bloodbank.core import config
from bloodbank.core.handlers import register_error_handlers, register_request_logging
from bloodbank.core.logging_config import configure_logging
from bloodbank.database import SessionLocal, engine, ensure_users_schema
from bloodbank.models import user
from bloodbank.routes import auth_routes

logger = logging.getLogger(__name__)


def build_auth_service() -> AuthService:
    config.validate_runtime_config()
    return AuthService(
        SessionLocal,
        config.JWT_SECRET,
        token_ttl=timedelta(minutes=config.JWT_EXPIRES_MINUTES),
        algorithm=config.JWT_ALGORITHM,
        bcrypt_rounds=config.BCRYPT_ROUNDS,
    )


def create_app(auth_service: AuthService | None = None) -> FastAPI:
    configure_logging()

    app = FastAPI(title='Blood Bank Login Service')
    app.state.auth_service = auth_service or build_auth_service()

    register_request_logging(app)
    register_error_handlers(app)

    @app.on_event('startup')
    def initialize_database() -> None:
        try:
            user.Base.metadata.create_all(bind=engine, tables=[user.User.__table__])
            ensure_users_schema()
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DB_* settings and Postgres credentials.')

    @app.get('/')
    def root():
        return {'status': 'Login Service Running'}

    app.include_router(auth_routes.router)

    logger.info('Login service configured')
    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=config.HOST, port=config.LOGIN_SERVICE_PORT)


if __name__ == '__main__':
    run()
