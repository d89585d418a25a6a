import pytest

from authgate.factory import create_app


@pytest.fixture()
def app(monkeypatch):
    monkeypatch.setenv('AUTH_ENDPOINT', 'https://auth.local:8443/verify?v=1')
    monkeypatch.setenv('AUTH_TIMEOUT', '5')
    monkeypatch.setenv('GATE_NAME', 'test_gate')
    return create_app()


@pytest.fixture()
def client(app):
    return app.test_client()
