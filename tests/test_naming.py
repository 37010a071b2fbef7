import pytest

from pagemarker.naming import clean_name, name_from_path


@pytest.mark.parametrize("path, expected", [
    ("/Users/List.php", "users_list"),
    ("/items", "items"),
    ("/items/", "items"),
    ("/reports/2024 q1.html", "reports_2024_q1"),
    ("/a/b-c/d.e.f", "a_b_c_d_e"),
    ("/search?q=x", "search"),
])
def test_name_from_path(path, expected):
    assert name_from_path(path) == expected


def test_name_from_empty_path_is_empty():
    assert name_from_path("") == ""
    assert name_from_path("/") == ""


def test_clean_name_collapses_spaces_and_separators():
    assert clean_name("my  page") == "my_page"
    assert clean_name("a   b") == "a_b"
    assert clean_name("x-y/z\\w.v") == "x_y_z_w_v"


@pytest.mark.parametrize("path", ["/Users/List.php", "/a  b/c d.txt", "/x-y.z/w", "/"])
def test_clean_name_is_idempotent(path):
    name = name_from_path(path)
    assert clean_name(name) == name
