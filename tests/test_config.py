from pathlib import Path

from src.courier.config import Settings


def test_allowed_origins_accept_comma_separated_string():
    config = Settings(frontend_allowed_origins="https://a.example, https://b.example,")
    assert config.frontend_allowed_origins == ("https://a.example", "https://b.example")


def test_allowed_origins_accept_json_array():
    config = Settings(frontend_allowed_origins='["https://a.example"]')
    assert config.frontend_allowed_origins == ("https://a.example",)


def test_data_root_is_resolved(tmp_path: Path):
    config = Settings(data_root=str(tmp_path / "runs" / ".." / "data"))
    assert config.data_root == (tmp_path / "data").resolve()


def test_env_overrides_dispatch_tuning(monkeypatch):
    monkeypatch.setenv("COURIER_DRIVER_SEARCH_RADIUS_M", "5000")
    monkeypatch.setenv("COURIER_AVERAGE_SPEED_KMH", "40")
    config = Settings()
    assert config.driver_search_radius_m == 5000
    assert config.average_speed_kmh == 40.0
