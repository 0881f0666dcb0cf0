from pathlib import Path

from issp_client.config import ClientSettings, endpoints


def test_defaults():
    settings = ClientSettings()
    assert settings.api_base == "http://localhost:5000"
    assert settings.auth_header == "x-auth-token"
    assert settings.insight_debounce == 0.6


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("ISSP_API_URL", "https://issp.example.edu/")
    monkeypatch.setenv("ISSP_SESSION_DIR", str(tmp_path))

    settings = ClientSettings.from_env()

    assert settings.api_base == "https://issp.example.edu"
    assert settings.session_dir == Path(tmp_path)


def test_explicit_override_wins(monkeypatch):
    monkeypatch.setenv("ISSP_API_URL", "https://issp.example.edu")
    settings = ClientSettings.from_env(api_base="http://localhost:8080", max_retries=None)
    assert settings.api_base == "http://localhost:8080"
    assert settings.max_retries == 3


def test_endpoint_paths():
    assert endpoints.request_detail("abc") == "/api/requests/abc"
    assert endpoints.resubmit_revision("abc") == "/api/requests/abc/resubmit-revision"
    assert endpoints.item_status("r/1", "i1") == "/api/requests/r%2F1/items/i1/status"
    assert endpoints.build_url("http://h/", "/api/requests") == "http://h/api/requests"
