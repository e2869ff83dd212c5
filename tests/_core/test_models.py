import pytest

from revalidate import PathFlags, Request


@pytest.mark.parametrize(
    "url, path",
    [
        ("http://testserver/etag/x/?q=1", "/etag/x/"),
        ("http://testserver", "/"),
        ("/etag/x/?q=1", "/etag/x/"),
        ("//static/etag/x/", "//static/etag/x/"),
    ],
)
def test_request_path(url, path):
    assert Request("GET", url).path == path


def test_path_flags():
    flags = PathFlags.from_path("//static/etag/x/")

    assert flags == PathFlags(static=True, etag=True)
    assert flags.recognized
    assert not flags.mutable
    assert PathFlags.from_path("/clock/x/").mutable
    assert not PathFlags.from_path("/etagx/").recognized
