from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from bloodbank.core.handlers import register_error_handlers, register_request_logging


def _build_app() -> FastAPI:
    app = FastAPI()
    register_request_logging(app)
    register_error_handlers(app)

    @app.get('/teapot')
    def teapot():
        raise HTTPException(status_code=418, detail='Short and stout')

    @app.get('/boom')
    def boom():
        raise RuntimeError('SELECT password FROM users')

    return app


def test_http_errors_render_as_error_body() -> None:
    response = TestClient(_build_app()).get('/teapot')

    assert response.status_code == 418
    assert response.json() == {'error': 'Short and stout'}


def test_unknown_route_renders_as_error_body() -> None:
    response = TestClient(_build_app()).get('/missing')

    assert response.status_code == 404
    assert response.json() == {'error': 'Not Found'}


def test_unhandled_errors_are_opaque(caplog) -> None:
    client = TestClient(_build_app(), raise_server_exceptions=False)

    response = client.get('/boom')

    assert response.status_code == 500
    assert response.json() == {'error': 'Internal server error'}
    assert 'SELECT' not in response.text
    assert 'Unhandled error on GET /boom' in caplog.text
