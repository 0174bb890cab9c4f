import httpx
import pytest

from arachnio import (
    API_KEY_HEADER_NAME,
    ArachnioClient,
    ArachnioTransportError,
    ArticleWebpageEntityMetadata,
    Authority,
    DefaultArachnioClient,
    DomainName,
    DomainNameBatch,
    DomainNameBatchEntry,
    DomainNameHost,
    ExtractedLink,
    ForbiddenError,
    InternalServerError,
    InvalidArgumentError,
    Link,
    LinkBatch,
    LinkBatchEntry,
    ParsedDomainName,
    ParsedDomainNameBatch,
    ParsedLink,
    ParsedLinkBatch,
    QueryParameter,
    RequestCanceledError,
    ResponseDecodingError,
    Scheme,
    UnrecognizedStatusError,
    UnwindingOutcome,
    UnwoundLink,
    UnwoundLinkBatch,
)
from conftest import (
    BASE_URL,
    EXTRACTED_LINK_JSON,
    NYT_URL,
    PARSED_DOMAIN_BATCH_JSON,
    PARSED_DOMAIN_JSON,
    PARSED_LINK_BATCH_JSON,
    PARSED_LINK_JSON,
    UNWOUND_LINK_BATCH_JSON,
    UNWOUND_LINK_JSON,
    RecordingHandler,
)

# (method, convenience argument, path, 200 body, result type, invalid-argument message)
OPERATIONS = [
    ("parse_domain_name", "www.google.com", "/domains/parse", PARSED_DOMAIN_JSON,
     ParsedDomainName, "invalid domain name"),
    ("parse_domain_name_batch", ["www.google.com", "not a host"], "/domains/parse/batch",
     PARSED_DOMAIN_BATCH_JSON, ParsedDomainNameBatch, "invalid domain name batch"),
    ("extract_link", NYT_URL, "/links/extract", EXTRACTED_LINK_JSON,
     ExtractedLink, "invalid link"),
    ("parse_link", "https://www.google.com/search?q=hello", "/links/parse", PARSED_LINK_JSON,
     ParsedLink, "invalid link"),
    ("parse_link_batch", ["https://www.google.com/search?q=hello"], "/links/parse/batch",
     PARSED_LINK_BATCH_JSON, ParsedLinkBatch, "invalid link batch"),
    ("unwind_link", NYT_URL, "/links/unwind", UNWOUND_LINK_JSON,
     UnwoundLink, "invalid link"),
    ("unwind_link_batch", [NYT_URL], "/links/unwind/batch", UNWOUND_LINK_BATCH_JSON,
     UnwoundLinkBatch, "invalid link batch"),
]

OPERATION_IDS = [op[0] for op in OPERATIONS]


def _call(client, method, argument):
    return getattr(client, method)(argument)


def _without_nulls(value):
    if isinstance(value, dict):
        return {k: _without_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_without_nulls(v) for v in value]
    return value


class TestSuccessfulResponses:
    @pytest.mark.parametrize("method,argument,path,body,result_type,_", OPERATIONS, ids=OPERATION_IDS)
    def test_200_deserializes_into_result_type(self, make_client, api_key, method, argument, path, body, result_type, _):
        handler = RecordingHandler(200, body)
        client = make_client(handler)

        result = _call(client, method, argument)

        assert isinstance(result, result_type)
        assert result.model_dump(mode="json", by_alias=True, exclude_none=True) == _without_nulls(body)

        request = handler.last_request
        assert request.method == "POST"
        assert request.url.path == "/v1" + path
        assert request.headers[API_KEY_HEADER_NAME] == api_key
        assert request.headers["Content-Type"] == "application/json"

    def test_parse_domain_name_example(self, make_client):
        handler = RecordingHandler(200, PARSED_DOMAIN_JSON)
        client = make_client(handler)

        result = client.parse_domain_name("www.google.com")

        assert result == ParsedDomainName(
            registry_suffix="com",
            public_suffix="google.com",
            hostname="www.google.com",
        )
        assert handler.last_json() == {"hostname": "www.google.com"}
        assert str(handler.last_request.url) == "http://arachnio.test/v1/domains/parse"

    def test_parse_link_builds_nested_models(self, make_client):
        client = make_client(RecordingHandler(200, PARSED_LINK_JSON))

        result = client.parse_link("https://www.google.com/search?q=hello")

        assert result == ParsedLink(
            link="https://www.google.com/search?q=hello",
            scheme=Scheme.HTTPS,
            authority=Authority(
                host=DomainNameHost(
                    domain=ParsedDomainName(
                        registry_suffix="com",
                        public_suffix="google.com",
                        hostname="www.google.com",
                    )
                )
            ),
            path="/search",
            query_parameters=[QueryParameter(name="q", value="hello")],
        )

    def test_unwind_link_outcome(self, make_client):
        client = make_client(RecordingHandler(200, UNWOUND_LINK_JSON))

        result = client.unwind_link(NYT_URL)

        assert result.outcome is UnwindingOutcome.SUCCESS2XX
        assert result.canonical is True
        assert result.unwound == result.original

    def test_extract_link_article(self, make_client):
        client = make_client(RecordingHandler(200, EXTRACTED_LINK_JSON))

        result = client.extract_link(NYT_URL)

        assert isinstance(result.entity, ArticleWebpageEntityMetadata)
        assert result.entity.title == "Spiders Are Caught in a Global Web of Misinformation"
        assert result.entity.published_at.isoformat() == "2022-08-25T13:43:50+00:00"
        assert result.entity.body_links[0].anchor_text == "reflected in the news"
        assert result.entity.body_links[0].outlink is True
        assert result.link.outcome is UnwindingOutcome.SUCCESS2XX

    def test_batch_entries_keep_order_and_errors(self, make_client):
        handler = RecordingHandler(200, PARSED_DOMAIN_BATCH_JSON)
        client = make_client(handler)

        result = client.parse_domain_name_batch(["www.google.com", "not a host"])

        assert handler.last_json() == {
            "entries": [{"hostname": "www.google.com"}, {"hostname": "not a host"}]
        }
        first, second = result.entries
        assert first.ok and first.result.public_suffix == "google.com"
        assert not second.ok
        assert second.error.code == "invalidHostname"

    def test_unknown_response_fields_are_ignored(self, make_client):
        body = dict(PARSED_DOMAIN_JSON, foo="bar", nested={"a": 1})
        client = make_client(RecordingHandler(200, body))

        result = client.parse_domain_name("www.google.com")

        assert result == ParsedDomainName.model_validate(PARSED_DOMAIN_JSON)


class TestRequestBodies:
    @pytest.mark.parametrize(
        "method,convenience,canonical",
        [
            ("parse_domain_name", "www.google.com", DomainName(hostname="www.google.com")),
            ("extract_link", "https://x/", Link(url="https://x/")),
            ("parse_link", "https://x/", Link(url="https://x/")),
            ("unwind_link", "https://x/", Link(url="https://x/")),
            (
                "parse_domain_name_batch",
                ["a.com", "b.org"],
                DomainNameBatch(entries=[DomainNameBatchEntry(hostname="a.com"),
                                         DomainNameBatchEntry(hostname="b.org")]),
            ),
            (
                "parse_link_batch",
                ["https://x/", LinkBatchEntry(url="https://y/")],
                LinkBatch(entries=[LinkBatchEntry(url="https://x/"), LinkBatchEntry(url="https://y/")]),
            ),
            (
                "unwind_link_batch",
                ("https://x/", "https://y/"),
                LinkBatch(entries=[LinkBatchEntry(url="https://x/"), LinkBatchEntry(url="https://y/")]),
            ),
        ],
    )
    def test_convenience_and_canonical_bodies_are_identical(self, make_client, method, convenience, canonical):
        handler = RecordingHandler(500)
        client = make_client(handler)

        for argument in (convenience, canonical):
            with pytest.raises(InternalServerError):
                _call(client, method, argument)

        first, second = handler.requests
        assert first.content == second.content

    def test_link_body(self, make_client):
        handler = RecordingHandler(200, UNWOUND_LINK_JSON)
        client = make_client(handler)

        client.unwind_link("https://example.com/a")

        assert handler.last_request.content == b'{"url":"https://example.com/a"}'

    def test_batch_rejects_single_string(self, make_client):
        handler = RecordingHandler(200, PARSED_LINK_BATCH_JSON)
        client = make_client(handler)

        with pytest.raises(TypeError):
            client.parse_link_batch("https://x/")
        assert handler.requests == []

    def test_non_ascii_body_is_utf8(self, make_client):
        handler = RecordingHandler(200, PARSED_DOMAIN_JSON)
        client = make_client(handler)

        client.parse_domain_name("bücher.de")

        assert handler.last_json() == {"hostname": "bücher.de"}


class TestStatusMapping:
    @pytest.mark.parametrize("method,argument,path,_body,_type,message", OPERATIONS, ids=OPERATION_IDS)
    def test_403_is_forbidden(self, make_client, method, argument, path, _body, _type, message):
        client = make_client(RecordingHandler(403))

        with pytest.raises(ForbiddenError) as exc_info:
            _call(client, method, argument)

        assert exc_info.value.status_code == 403
        assert exc_info.value.path == path

    @pytest.mark.parametrize("status_code", [400, 422])
    @pytest.mark.parametrize("method,argument,path,_body,_type,message", OPERATIONS, ids=OPERATION_IDS)
    def test_400_and_422_are_invalid_argument(self, make_client, status_code, method, argument, path, _body, _type, message):
        client = make_client(RecordingHandler(status_code, {"detail": "nope"}))

        with pytest.raises(InvalidArgumentError) as exc_info:
            _call(client, method, argument)

        assert str(exc_info.value) == message
        assert exc_info.value.status_code == status_code
        assert isinstance(exc_info.value, ValueError)

    @pytest.mark.parametrize("method,argument,path,_body,_type,message", OPERATIONS, ids=OPERATION_IDS)
    def test_500_is_internal_error(self, make_client, method, argument, path, _body, _type, message):
        client = make_client(RecordingHandler(500))

        with pytest.raises(InternalServerError):
            _call(client, method, argument)

    @pytest.mark.parametrize("status_code", [201, 204, 301, 401, 404, 429, 502, 503])
    @pytest.mark.parametrize("method,argument,path,_body,_type,message", OPERATIONS, ids=OPERATION_IDS)
    def test_other_status_is_unrecognized(self, make_client, status_code, method, argument, path, _body, _type, message):
        client = make_client(RecordingHandler(status_code))

        with pytest.raises(UnrecognizedStatusError) as exc_info:
            _call(client, method, argument)

        assert exc_info.value.status_code == status_code
        assert str(status_code) in str(exc_info.value)

    def test_forbidden_unwind_example(self, make_client):
        handler = RecordingHandler(403)
        client = make_client(handler)

        with pytest.raises(ForbiddenError):
            client.unwind_link("https://example.com/a")

        assert handler.last_request.url.path == "/v1/links/unwind"
        assert handler.last_json() == {"url": "https://example.com/a"}


class TestFailures:
    def test_malformed_body_is_decoding_error(self, make_client):
        client = make_client(RecordingHandler(200, content=b"{not json"))

        with pytest.raises(ResponseDecodingError) as exc_info:
            client.parse_domain_name("www.google.com")

        assert isinstance(exc_info.value, ArachnioTransportError)

    def test_schema_mismatch_is_decoding_error(self, make_client):
        client = make_client(RecordingHandler(200, {"registrySuffix": "com"}))

        with pytest.raises(ResponseDecodingError):
            client.parse_domain_name("www.google.com")

    def test_empty_body_is_decoding_error(self, make_client):
        client = make_client(RecordingHandler(200))

        with pytest.raises(ResponseDecodingError):
            client.parse_link("https://x/")

    def test_connection_error_is_transport_error(self, make_client):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(ArachnioTransportError) as exc_info:
            client.parse_link("https://x/")

        assert not isinstance(exc_info.value, RequestCanceledError)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout_is_canceled(self, make_client):
        def handler(request):
            raise httpx.ReadTimeout("too slow", request=request)

        client = make_client(handler)

        with pytest.raises(RequestCanceledError) as exc_info:
            client.unwind_link("https://x/")

        assert exc_info.value.path == "/links/unwind"


class TestConstruction:
    def test_trailing_slash_is_stripped(self, make_client):
        handler = RecordingHandler(200, PARSED_DOMAIN_JSON)
        client = make_client(handler, base_url=BASE_URL + "/")

        client.parse_domain_name("www.google.com")

        assert client.base_url == BASE_URL
        assert handler.last_request.url.path == "/v1/domains/parse"

    @pytest.mark.parametrize("base_url", [None, ""])
    def test_missing_base_url_is_rejected(self, base_url):
        with pytest.raises(ValueError, match="base_url"):
            DefaultArachnioClient(base_url, "key", client=httpx.Client())

    @pytest.mark.parametrize("api_key", [None, ""])
    def test_missing_api_key_is_rejected(self, api_key):
        with pytest.raises(ValueError, match="api_key"):
            DefaultArachnioClient(BASE_URL, api_key, client=httpx.Client())

    def test_custom_header_name(self):
        handler = RecordingHandler(200, PARSED_DOMAIN_JSON)
        http = httpx.Client(transport=httpx.MockTransport(handler))
        client = DefaultArachnioClient(BASE_URL, "secret", client=http, api_key_header="BLOBR-API-KEY")

        client.parse_domain_name("www.google.com")

        assert handler.last_request.headers["BLOBR-API-KEY"] == "secret"
        assert API_KEY_HEADER_NAME not in handler.last_request.headers

    def test_repr_hides_api_key(self):
        client = DefaultArachnioClient(BASE_URL, "super-secret", client=httpx.Client())

        assert "super-secret" not in repr(client)
        assert BASE_URL in repr(client)

    def test_satisfies_protocol(self, make_client):
        client = make_client(RecordingHandler(200))

        assert isinstance(client, ArachnioClient)

    def test_injected_client_is_not_closed(self, make_client):
        http = httpx.Client(transport=httpx.MockTransport(RecordingHandler(200, PARSED_DOMAIN_JSON)))

        with DefaultArachnioClient(BASE_URL, "key", client=http) as client:
            client.parse_domain_name("www.google.com")

        assert not http.is_closed

    def test_owned_client_is_closed(self):
        client = DefaultArachnioClient(BASE_URL, "key")

        client.close()

        assert client._client.is_closed
