import pytest

from app.config import Settings


def test_defaults(monkeypatch):
    for key in ('ENV', 'FRONTEND_ORIGIN', 'ALLOW_DEV_CORS', 'LOG_LEVEL'):
        monkeypatch.delenv(key, raising=False)
    s = Settings()
    assert s.ENV == 'dev'
    assert s.FRONTEND_ORIGIN == 'http://localhost:3000'
    assert s.ALLOW_DEV_CORS is True
    assert s.LOG_LEVEL == 'INFO'


def test_empty_database_url_rejected(monkeypatch):
    monkeypatch.setenv('DATABASE_URL', '  ')
    with pytest.raises(RuntimeError):
        Settings()


def test_wildcard_origin_rejected_outside_dev(monkeypatch):
    monkeypatch.setenv('ENV', 'prod')
    monkeypatch.setenv('FRONTEND_ORIGIN', '*')
    with pytest.raises(RuntimeError):
        Settings()
    monkeypatch.setenv('ENV', 'dev')
    assert Settings().FRONTEND_ORIGIN == '*'
