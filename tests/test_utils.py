from inline_snapshot import snapshot

from revalidate._utils import canonical_header_name, first_line, format_http_date, parse_date


def test_format_http_date_drops_fraction():
    assert format_http_date(1356034332.99) == snapshot("Thu, 20 Dec 2012 20:12:12 GMT")


def test_parse_date():
    assert parse_date("Thu, 20 Dec 2012 20:12:12 GMT") == 1356034332
    assert parse_date("not a date") is None


def test_canonical_header_name():
    assert canonical_header_name("if-unmodified-since") == "If-Unmodified-Since"
    assert canonical_header_name("x-FORWARDED-for") == "X-Forwarded-For"


def test_first_line():
    assert first_line("one\ntwo\nthree") == "one"
    assert first_line("single") == "single"
