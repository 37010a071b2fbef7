import os
from flask import Flask, g, render_template_string, request

from pagemarker.config import get_bind
from pagemarker.integration import init_app, remember_page

PAGE_SIZE = 5

ITEMS = [
    "apple", "apricot", "banana", "blackberry", "blueberry", "cherry",
    "date", "fig", "grape", "kiwi", "lemon", "lime", "mango", "melon",
    "orange", "peach", "pear", "plum", "raspberry", "strawberry",
]

_LISTING = """<!doctype html>
<title>Items</title>
<form method="get">
  <input name="q" value="{{ q }}" placeholder="filter">
  <select name="sort">
    <option value="asc" {% if sort == 'asc' %}selected{% endif %}>A-Z</option>
    <option value="desc" {% if sort == 'desc' %}selected{% endif %}>Z-A</option>
  </select>
  <input type="hidden" name="page" value="1">
  <button>Apply</button>
  <a href="{{ pagemarker_reset_url() }}">Reset</a>
</form>
<ul>{% for item in items %}<li>{{ item }}</li>{% endfor %}</ul>
<p>Page {{ page }} of {{ pages }} (remembered as <code>{{ marker_name }}</code>)</p>
"""


def build_app():
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv("PAGEMARKER_SECRET_KEY", "dev")
    init_app(app)

    @app.route("/items")
    @remember_page(exclude=["csrf_token"])
    def items():
        q = request.args.get("q", "").strip().lower()
        sort = request.args.get("sort", "asc")
        rows = sorted((i for i in ITEMS if q in i), reverse=(sort == "desc"))
        pages = max(1, -(-len(rows) // PAGE_SIZE))
        try:
            page = min(max(1, int(request.args.get("page", 1))), pages)
        except ValueError:
            page = 1
        start = (page - 1) * PAGE_SIZE
        return render_template_string(
            _LISTING,
            items=rows[start:start + PAGE_SIZE],
            q=q,
            sort=sort,
            page=page,
            pages=pages,
            marker_name=g.page_marker.name,
        )

    return app

def run_dev():
    app = build_app()
    app.run(debug=True, port=8050)

def run_prod():
    host, port = get_bind()
    app = build_app()
    app.run(host=host, port=port, debug=False)
