import json
import logging
import uuid
from typing import Callable, List, Optional

import httpx
import pytest

from arachnio import AsyncArachnioClient, DefaultArachnioClient

BASE_URL = "http://arachnio.test/v1"

PARSED_DOMAIN_JSON = {
    "registrySuffix": "com",
    "publicSuffix": "google.com",
    "hostname": "www.google.com",
}

PARSED_LINK_JSON = {
    "link": "https://www.google.com/search?q=hello",
    "scheme": "https",
    "authority": {
        "host": {
            "type": "domain",
            "domain": PARSED_DOMAIN_JSON,
        },
        "port": None,
    },
    "path": "/search",
    "queryParameters": [{"name": "q", "value": "hello"}],
}

NYT_URL = "https://www.nytimes.com/2022/08/25/science/spiders-misinformation-rumors.html"

NYT_PARSED_LINK_JSON = {
    "link": NYT_URL,
    "scheme": "https",
    "authority": {
        "host": {
            "type": "domain",
            "domain": {
                "registrySuffix": "com",
                "publicSuffix": "nytimes.com",
                "hostname": "www.nytimes.com",
            },
        },
        "port": None,
    },
    "path": "/2022/08/25/science/spiders-misinformation-rumors.html",
    "queryParameters": [],
}

UNWOUND_LINK_JSON = {
    "original": NYT_PARSED_LINK_JSON,
    "unwound": NYT_PARSED_LINK_JSON,
    "outcome": "success2xx",
    "canonical": True,
}

EXTRACTED_LINK_JSON = {
    "link": UNWOUND_LINK_JSON,
    "entity": {
        "entityType": "webpage",
        "webpageType": "article",
        "title": "Spiders Are Caught in a Global Web of Misinformation",
        "thumbnail": {
            "url": "https://static01.nyt.com/images/2022/08/24/science/00SCI-SPIDERLIES-01/00SCI-SPIDERLIES-01-facebookJumbo-v2.jpg",
            "width": None,
            "height": None,
        },
        "description": "Researchers looked at thousands of spider news stories to study how sensationalized information spreads.",
        "keywords": None,
        "author": None,
        "publishedAt": "2022-08-25T13:43:50Z",
        "modifiedAt": "2022-08-25T16:15:34Z",
        "bodyHtml": "<p>We live in a world filled with spiders.</p>",
        "bodyText": "We live in a world filled with spiders.",
        "bodyLinks": [
            {
                "href": {
                    "link": "https://www.nature.com/articles/s41597-022-01197-6",
                    "scheme": "https",
                    "authority": {
                        "host": {
                            "type": "domain",
                            "domain": {
                                "registrySuffix": "com",
                                "publicSuffix": "nature.com",
                                "hostname": "www.nature.com",
                            },
                        },
                        "port": None,
                    },
                    "path": "/articles/s41597-022-01197-6",
                    "queryParameters": [],
                },
                "rel": None,
                "outlink": True,
                "anchorText": "reflected in the news",
            }
        ],
    },
}

PARSED_DOMAIN_BATCH_JSON = {
    "entries": [
        {"result": PARSED_DOMAIN_JSON},
        {"error": {"code": "invalidHostname", "message": "not a hostname"}},
    ]
}

PARSED_LINK_BATCH_JSON = {"entries": [{"result": PARSED_LINK_JSON}]}

UNWOUND_LINK_BATCH_JSON = {"entries": [{"result": UNWOUND_LINK_JSON}]}


class RecordingHandler:
    """Fake server: answers every request with a fixed response and keeps the requests."""

    def __init__(self, status_code: int = 200, body: Optional[object] = None, content: Optional[bytes] = None):
        self.status_code = status_code
        self.body = body
        self.content = content
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> object:
        return json.loads(self.last_request.content.decode("utf-8"))


@pytest.fixture
def api_key() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def make_client(api_key) -> Callable[..., DefaultArachnioClient]:
    """Build a sync client whose transport is a RecordingHandler."""

    def _make(handler: RecordingHandler, base_url: str = BASE_URL) -> DefaultArachnioClient:
        http = httpx.Client(transport=httpx.MockTransport(handler))
        return DefaultArachnioClient(base_url, api_key, client=http)

    return _make


@pytest.fixture
def make_async_client(api_key) -> Callable[..., AsyncArachnioClient]:
    def _make(handler: RecordingHandler, base_url: str = BASE_URL) -> AsyncArachnioClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return AsyncArachnioClient(base_url, api_key, client=http)

    return _make


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logger (the console installs one per run)."""

    yield
    logger = logging.getLogger("arachnio")
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(logging.NOTSET)
