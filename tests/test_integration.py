from flask import Flask, g

from pagemarker.integration import current_marker, init_app, reset_url


def _app():
    app = Flask(__name__)
    app.secret_key = "test"
    return init_app(app)


def test_reset_url_without_page_marker(monkeypatch):
    monkeypatch.delenv("PAGEMARKER_RESET_KEY", raising=False)
    app = _app()
    with app.test_request_context("/items?sort=asc"):
        assert g.get("page_marker") is None
        assert reset_url() == "http://localhost/items?__pagemarker_reset=1"


def test_current_marker_reads_app_config():
    app = _app()
    app.config["PAGEMARKER_NAMESPACE"] = "Lists"
    app.config["PAGEMARKER_RESET_KEY"] = "clear"
    with app.test_request_context("/items"):
        m = current_marker()
        assert m.store.key("items") == "Lists.items"
        assert m.get_reset_url() == "http://localhost/items?clear=1"
