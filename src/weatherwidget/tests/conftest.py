import pytest

from weatherwidget.models.schemas import RawForecast
from weatherwidget.tests.fakes import FakeFetcher, FakeResolver
from weatherwidget.tests.test_data import dummy_forecast


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def forecast() -> RawForecast:
    return RawForecast.model_validate(dummy_forecast)


