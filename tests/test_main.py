"""
Test cases for main API endpoints
"""

from fastapi.testclient import TestClient

from playground.config import Settings
from playground.main import create_app


def test_health_check_endpoint(client):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data
    assert "version" in data


def test_docs_accessible(client):
    """Test that API documentation is accessible"""
    response = client.get("/docs")
    assert response.status_code == 200


def test_openapi_lists_only_post_upload(client):
    """Test that the rejected methods stay out of the schema"""
    schema = client.get("/openapi.json").json()
    assert list(schema["paths"]["/api/upload/"]) == ["post"]


def test_static_files_served(tmp_path):
    """Test that the static directory and uploaded files are served at /"""
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<h1>upload</h1>")
    settings = Settings(
        STATIC_DIR=str(static_dir),
        UPLOAD_DIR=str(static_dir / "upload"),
    )
    client = TestClient(create_app(settings))

    index = client.get("/")
    assert index.status_code == 200
    assert "<h1>upload</h1>" in index.text

    upload = client.post(
        "/api/upload/",
        files={"inputFile": ("hello.txt", b"hello world", "text/plain")},
    )
    assert upload.status_code == 201

    download = client.get("/upload/hello.txt")
    assert download.status_code == 200
    assert download.content == b"hello world"


def test_upload_path_rejects_other_methods_with_static_mounted(tmp_path):
    """Test that the static mount at / does not take over the upload path"""
    static_dir = tmp_path / "static"
    static_dir.mkdir()
    settings = Settings(
        STATIC_DIR=str(static_dir),
        UPLOAD_DIR=str(static_dir / "upload"),
    )
    client = TestClient(create_app(settings))

    for method in ("GET", "TRACE", "FOO"):
        response = client.request(method, "/api/upload/")
        assert response.status_code == 405
        assert response.text == "Method not allowed"
        assert response.headers["allow"] == "POST"


def test_unhandled_exception_returns_envelope(test_settings):
    """Test that an exception escaping a route becomes a 500 envelope"""
    app = create_app(test_settings)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("exploded")

    response = TestClient(app).get("/boom")
    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {
        "status": 500,
        "message": "",
        "error": "Internal server error",
    }


def test_static_files_not_mounted_when_missing(client):
    """Test that a missing static directory leaves / unrouted"""
    response = client.get("/")
    assert response.status_code == 404
