"""
Bing Image Archive API - URL Builder

This module is a wrapper around the public, unauthenticated Bing image archive endpoint
(HPImageArchive.aspx) which serves the metadata for the last few "image of the day" wallpapers.
These functions only build well-formed URLs. The actual requests are performed by the image handler
so that this file stays limited to knowing the shape of the archive's URLs.

Image resources are addressed by appending a size token and an extension to the 'urlbase' of an
image record, e.g. /th?id=OHR.SomePlace_EN-US1234 -> https://www.bing.com/th?id=OHR.SomePlace_EN-US1234_UHD.jpg
"""

from functools import wraps
from urllib.parse import parse_qs
from urllib.parse import urlencode
from urllib.parse import urlparse


def base_url(func):
    """
    Use this decorator to inject the base url into each url builder. That way should the host change
    in the future it can be done in one place.
    """

    base_url = "https://www.bing.com"

    @wraps(func)
    def wrapper(*args, **kwargs):
        return func(base_url=base_url, *args, **kwargs)

    return wrapper


def url_path(url_path: str):
    """
    Use this decorator to inject the correct path component for the intended endpoint.
    """

    def wrapper(func):
        @wraps(func)
        def inner(*args, **kwargs):
            return func(url_path=url_path, *args, **kwargs)

        return inner

    return wrapper


@base_url
@url_path("HPImageArchive.aspx")
def archive_url(
    number: int = 8, index: int = None, market: str = None, *args, **kwargs
) -> str:
    """
    Build the url for requesting image metadata. 'format' is always json ('js'), 'idx' and 'mkt'
    are only sent when given.
    """

    base_url: str = kwargs.get("base_url")
    path: str = kwargs.get("url_path")

    params = [("format", "js"), ("n", number)]
    if index is not None:
        params.append(("idx", index))
    if market:
        params.append(("mkt", market))

    # should end up with something like "https://www.bing.com/HPImageArchive.aspx?format=js&n=8&mkt=en-CA"
    return f"{base_url}/{path}?{urlencode(params)}"


@base_url
def image_url(url_base: str, size: str, ext: str, *args, **kwargs) -> str:
    """
    Build the download url of an image from its 'urlbase' and the configured size and extension.
    """

    base_url: str = kwargs.get("base_url")

    return f"{base_url}{url_base}_{size}.{ext}"


def image_id(url: str) -> str:
    """
    Return the value of the 'id' query parameter of an image url.

    The archive always addresses images through an 'id' parameter. A url without one means the
    API changed under us, so this raises ValueError instead of returning something usable.
    """

    query = parse_qs(urlparse(url).query)

    try:
        return query["id"][0]

    except KeyError:
        raise ValueError(f"Image url {url} has no 'id' query parameter.")


if __name__ == "__main__":
    print(archive_url())
    print(archive_url(number=1, index=1, market="en-CA"))
    print(image_url("/th?id=OHR.Foo_EN-CA123", size="UHD", ext="jpg"))
    print(image_id(image_url("/th?id=OHR.Foo_EN-CA123", size="1920x1080", ext="webp")))
