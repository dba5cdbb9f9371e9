import copy

import pytest
import requests

from eticket import records
from eticket.conf import RenderOptions


@pytest.fixture(autouse=True)
def no_network(monkeypatch):
    """Remote images fail fast instead of reaching the internet."""
    def refuse(url, *args, **kwargs):
        raise requests.ConnectionError(f"network disabled in tests: {url}")

    monkeypatch.setattr("eticket.assets.requests.get", refuse)


@pytest.fixture
def event_order():
    return copy.deepcopy(records.sample_order("event_order"))


@pytest.fixture
def product_order():
    return copy.deepcopy(records.sample_order("product_order"))


@pytest.fixture
def options(tmp_path):
    return RenderOptions.from_settings(time_zone="America/New_York", temp_dir=str(tmp_path))
