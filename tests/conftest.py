from unittest.mock import MagicMock

import pytest
import requests

from mcp_kr_apartment.apis.client import RealEstateClient
from mcp_kr_apartment.config import AptTradeConfig
from mcp_kr_apartment.server import RealEstateContext


def make_response(text="", json_data=None, status_code=200, content_type="text/xml;charset=UTF-8"):
    """requests.get 이 돌려주는 Response 흉내"""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.headers = {"Content-Type": content_type}
    response.text = text
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Server Error", response=response
        )
    return response


@pytest.fixture
def keyed_config():
    return AptTradeConfig(api_key="test-service-key", timeout=5.0)


@pytest.fixture
def keyed_context(keyed_config):
    return RealEstateContext(client=RealEstateClient(config=keyed_config))


@pytest.fixture
def keyless_context():
    return RealEstateContext(client=RealEstateClient(config=AptTradeConfig(api_key=None)))
