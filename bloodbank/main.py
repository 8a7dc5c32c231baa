import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from bloodbank.core import config
from bloodbank.core.handlers import register_error_handlers, register_request_logging
from bloodbank.core.logging_config import configure_logging
from bloodbank.database import engine
from bloodbank.models import blood_record
from bloodbank.routes import donor_routes

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title='Blood Group Collector API')

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials='*' not in config.CORS_ORIGINS,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_request_logging(app)
    register_error_handlers(app)

    @app.on_event('startup')
    def initialize_database() -> None:
        try:
            blood_record.Base.metadata.create_all(bind=engine, tables=[blood_record.BloodRecord.__table__])
        except SQLAlchemyError:
            logger.exception('Database initialization failed. Check DB_* settings and Postgres credentials.')

    @app.get('/')
    def root():
        return {'status': 'Donor Records API Running'}

    app.include_router(donor_routes.router)

    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=config.HOST, port=config.DONOR_SERVICE_PORT)


if __name__ == '__main__':
    run()
