import pytest

from revalidate import Headers
from revalidate._core._headers import is_etagc, quote_etag, unquote_etag


def test_headers_are_case_insensitive():
    headers = Headers({"ETag": '"a"'})

    assert headers["etag"] == '"a"'
    assert headers.get_first("ETAG") == '"a"'
    assert "Etag" not in list(headers)


def test_setting_appends():
    headers = Headers({})
    headers["Vary"] = "Accept"
    headers["vary"] = "Accept-Encoding"

    assert headers.get_list("Vary") == ["Accept", "Accept-Encoding"]
    assert headers["Vary"] == "Accept, Accept-Encoding"


def test_missing_header():
    headers = Headers({})

    assert headers.get_first("If-Match") is None
    assert headers.get_list("If-Match") is None
    with pytest.raises(KeyError):
        headers["If-Match"]


def test_delete_and_equality():
    headers = Headers({"A": "1", "B": ["2", "3"]})
    del headers["a"]

    assert headers == Headers({"b": ["2", "3"]})
    assert len(headers) == 1


def test_multi_items_keeps_every_field_line():
    headers = Headers({"Vary": ["Accept", "Accept-Encoding"], "ETag": '"a"'})

    assert headers.multi_items() == [("vary", "Accept"), ("vary", "Accept-Encoding"), ("etag", '"a"')]


def test_etagc():
    assert is_etagc("!")
    assert is_etagc("~")
    assert is_etagc("\xe9")
    assert not is_etagc('"')
    assert not is_etagc(" ")
    assert not is_etagc("\x7f")


@pytest.mark.parametrize(
    "value, expected",
    [
        ('"2012-12-20,20:12:12"', "2012-12-20,20:12:12"),
        ('W/"weak"', "weak"),
        ('  "padded"  ', "padded"),
        ('""', ""),
        ("bare", None),
        ('"a" "b"', None),
        ('"open', None),
        ('"sp ace"', None),
        ('"back\\"slash"', None),
        ('w/"lowercase-weak"', None),
    ],
)
def test_unquote_etag(value, expected):
    assert unquote_etag(value) == expected


def test_quote_etag():
    assert unquote_etag(quote_etag("opaque")) == "opaque"
