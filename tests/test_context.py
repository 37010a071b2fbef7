import pytest
from flask import Flask

from pagemarker.context import RequestContext, split_host
from pagemarker.errors import MissingRequestContext


@pytest.mark.parametrize("host, expected", [
    ("example.org", ("example.org", None)),
    ("example.org:8050", ("example.org", "8050")),
    ("[::1]:8080", ("[::1]", "8080")),
    ("[::1]", ("[::1]", None)),
])
def test_split_host(host, expected):
    assert split_host(host) == expected


def test_current_outside_request_raises():
    with pytest.raises(MissingRequestContext):
        RequestContext.current()


def test_from_request_uses_host_header():
    app = Flask(__name__)
    with app.test_request_context("/items?tag=a&tag=b&page=2", headers={"Host": "shop.example.org:8443"}):
        ctx = RequestContext.current()
    assert ctx.server_name == "shop.example.org"
    assert ctx.server_port == "8443"
    assert ctx.query == {"tag": ["a", "b"], "page": "2"}
    assert ctx.url() == "http://shop.example.org:8443/items"
