from fastapi.testclient import TestClient

from weatherwidget.models.schemas import WidgetOptions
from weatherwidget.pipelines.scheduler import RefreshScheduler
from weatherwidget.server import create_app, options_from_env
from weatherwidget.tests.fakes import FakeFetcher, fetch_error


def _app(resolver, fetcher, **options):
    scheduler = RefreshScheduler(
        WidgetOptions(api_key="k", **options), resolver=resolver, fetcher=fetcher, tz="UTC"
    )
    return scheduler, create_app(scheduler)


def test_refresh_then_read_widget(resolver, fetcher):
    scheduler, app = _app(resolver, fetcher, bar_color="#123")

    with TestClient(app) as client:
        r = client.post("/api/widget/refresh")
        assert r.status_code == 200
        state = r.json()
        assert state["loading"] is False
        assert state["error"] is None
        assert state["location"]["name"] == "Seoul, South Korea"
        assert state["weather"]["currently"]["temperature"] == 11.0

        r = client.get("/api/widget")
        data = r.json()
        assert data["display"]["windBearing"] == "S"
        assert len(data["display"]["daily"]) == 2
        assert {"weekName", "height", "top", "bottom"} <= set(data["display"]["daily"][0])
        assert data["rendering"] == {
            "hideHeader": False,
            "disableAnimation": False,
            "barColor": "#123",
            "textColor": "#333",
        }

    assert scheduler.closed


def test_failed_refresh_reports_error_without_display(resolver):
    _, app = _app(resolver, FakeFetcher(fetch_error(), fetch_error()))

    with TestClient(app) as client:
        state = client.post("/api/widget/refresh").json()
        assert state["error"] == "openweather 응답 오류 (status=500)"
        assert state["weather"] is None

        data = client.get("/api/widget").json()
        assert data["display"] is None

        health = client.get("/health").json()
        assert health == {"status": "ok", "loading": False, "error": "openweather 응답 오류 (status=500)"}


def test_patch_options_rehydrates(resolver, fetcher):
    scheduler, app = _app(resolver, fetcher)

    with TestClient(app) as client:
        client.post("/api/widget/refresh")

        r = client.patch("/api/widget/options", json={"address": "Paris", "units": "si"})
        assert r.status_code == 200
        assert r.json()["loading"] is False
        before = len(resolver.calls)
        assert resolver.calls[-1].address == "Paris"
        assert fetcher.calls[-1]["units"] == "si"

        r = client.patch("/api/widget/options", json={"textColor": "#000"})
        assert r.status_code == 200
        assert len(resolver.calls) == before
        assert scheduler.options.text_color == "#000"


def test_patch_options_rejects_bad_input(resolver, fetcher):
    _, app = _app(resolver, fetcher)

    with TestClient(app) as client:
        assert client.patch("/api/widget/options", json={"bogus": 1}).status_code == 422
        assert client.patch("/api/widget/options", json={"barColor": None}).status_code == 422


def test_options_from_env(monkeypatch):
    import config

    monkeypatch.setattr(config, "WEATHER_PROVIDER", "darksky")
    monkeypatch.setattr(config, "WIDGET_LATITUDE", "37.5")
    monkeypatch.setattr(config, "WIDGET_LONGITUDE", "127.0")
    monkeypatch.setattr(config, "WIDGET_UPDATE_INTERVAL", "600000")

    opts = options_from_env()

    assert opts.provider == "darksky"
    assert opts.query().coordinates() == (37.5, 127.0)
    assert opts.update_interval == 600000.0
