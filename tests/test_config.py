from accessdb.config import Settings


def test_defaults(monkeypatch, tmp_path):
    for name in ("ACCESS_ROOT", "HOST", "PORT", "INDEX_FILE", "MAX_BODY_BYTES", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    s = Settings.from_env()
    assert s.root_dir == tmp_path.resolve()
    assert s.port == 3000
    assert s.index_file == "add_app2.html"
    assert s.max_body_bytes == 1024 * 1024
    assert s.cors_origins == ["*"]
    assert s.log_level == "INFO"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("ACCESS_ROOT", str(tmp_path))
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("INDEX_FILE", "index.html")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = Settings.from_env()
    assert s.root_dir == tmp_path.resolve()
    assert s.port == 8080
    assert s.index_file == "index.html"
    assert s.cors_origins == ["http://a.example", "http://b.example"]
    assert s.log_level == "DEBUG"
