import httpx
import pytest

from weatherwidget.core.errors import FetchError
from weatherwidget.weather.darksky import DarkSkyForecastProvider
from weatherwidget.weather.fetcher import WeatherFetcher
from weatherwidget.weather.openweather import OpenWeatherForecastProvider, normalize_onecall, to_skycon
from weatherwidget.tests.test_data import NOW, dummy_forecast, dummy_onecall


def _transport(payload=None, status=200, seen=None, exc=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if exc is not None:
            raise exc
        return httpx.Response(status, json=payload)

    return httpx.MockTransport(handler)


# ===== OpenWeather 정규화 =====
@pytest.mark.parametrize(
    "code, expected",
    [
        ("01d", "clear-day"), ("01n", "clear-night"), ("02d", "partly-cloudy-day"),
        ("02n", "partly-cloudy-night"), ("03d", "cloudy"), ("04n", "cloudy"),
        ("09d", "rain"), ("10n", "rain"), ("11d", "rain"), ("13d", "snow"),
        ("50n", "fog"), ("99d", "cloudy"), (None, "cloudy"),
    ],
)
def test_to_skycon(code, expected):
    assert to_skycon(code) == expected


def test_normalize_onecall_shape():
    doc = normalize_onecall(dummy_onecall)

    assert doc["currently"]["temperature"] == 52.3
    assert doc["currently"]["windBearing"] == 350
    assert doc["currently"]["icon"] == "cloudy"
    assert doc["currently"]["summary"] == "scattered clouds"
    assert doc["currently"]["humidity"] == pytest.approx(0.81)
    assert doc["currently"]["cloudCover"] == pytest.approx(0.4)
    assert [h["time"] for h in doc["hourly"]["data"]] == [NOW + 1000, NOW + 4600]
    assert doc["hourly"]["data"][0]["icon"] == "rain"
    assert [(d["temperatureMax"], d["temperatureMin"]) for d in doc["daily"]["data"]] == [(55.0, 45.0), (58.0, 44.0)]
    assert doc["daily"]["data"][1]["icon"] == "snow"
    assert doc["timezone"] == "Europe/Paris"


async def test_openweather_provider_request_and_result():
    seen = []
    provider = OpenWeatherForecastProvider("owm-key", transport=_transport(dummy_onecall, seen=seen))

    weather = await provider.forecast(lat=48.85, lng=2.35, units="us", language="fr")

    params = seen[0].url.params
    assert seen[0].url.path == "/data/3.0/onecall"
    assert params["appid"] == "owm-key"
    assert params["units"] == "imperial"
    assert params["lang"] == "fr"
    assert (params["lat"], params["lon"]) == ("48.85", "2.35")
    assert weather.currently.wind_bearing == 350
    assert weather.daily.data[0].temperature_max == 55.0


@pytest.mark.parametrize("units, expected", [("si", "metric"), ("ca", "metric"), ("uk2", "metric"), ("auto", "metric"), ("kelvin", "standard")])
async def test_openweather_units_mapping(units, expected):
    seen = []
    provider = OpenWeatherForecastProvider("k", transport=_transport(dummy_onecall, seen=seen))

    await provider.forecast(lat=1.0, lng=2.0, units=units, language="en")

    assert seen[0].url.params["units"] == expected


# ===== Dark Sky =====
async def test_darksky_provider_passes_document_through():
    seen = []
    provider = DarkSkyForecastProvider("ds-key", transport=_transport(dummy_forecast, seen=seen))

    weather = await provider.forecast(lat=37.5665, lng=126.978, units="si", language="ko")

    assert seen[0].url.path == "/forecast/ds-key/37.5665,126.978"
    assert seen[0].url.params["units"] == "si"
    assert seen[0].url.params["lang"] == "ko"
    assert weather.currently.temperature == 11.0
    assert len(weather.hourly.data) == 3


# ===== WeatherFetcher =====
async def test_fetcher_selects_provider():
    fetcher = WeatherFetcher(transport=_transport(dummy_onecall))

    weather = await fetcher.fetch(api_key="k", lat=1.0, lng=2.0, units="us", language="en", provider="openweather")

    assert weather.timezone == "Europe/Paris"


async def test_fetcher_unknown_provider():
    with pytest.raises(FetchError, match="알 수 없는"):
        await WeatherFetcher().fetch(api_key="k", lat=1.0, lng=2.0, units="us", language="en", provider="yahoo")


async def test_fetcher_missing_key_makes_no_request():
    seen = []
    fetcher = WeatherFetcher(transport=_transport(dummy_forecast, seen=seen))

    with pytest.raises(FetchError):
        await fetcher.fetch(api_key="", lat=1.0, lng=2.0, units="us", language="en", provider="darksky")
    assert seen == []


async def test_fetcher_http_status_error():
    fetcher = WeatherFetcher(transport=_transport({"cod": 401}, status=401))

    with pytest.raises(FetchError, match="status=401"):
        await fetcher.fetch(api_key="bad", lat=1.0, lng=2.0, units="us", language="en", provider="openweather")


async def test_fetcher_network_error():
    fetcher = WeatherFetcher(transport=_transport(exc=httpx.ConnectError("refused")))

    with pytest.raises(FetchError) as exc:
        await fetcher.fetch(api_key="k", lat=1.0, lng=2.0, units="us", language="en", provider="darksky")
    assert isinstance(exc.value.__cause__, httpx.ConnectError)


async def test_fetcher_parse_error():
    fetcher = WeatherFetcher(transport=_transport({"currently": {"summary": "no temperature"}}))

    with pytest.raises(FetchError, match="파싱"):
        await fetcher.fetch(api_key="k", lat=1.0, lng=2.0, units="us", language="en", provider="darksky")
