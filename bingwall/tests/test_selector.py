"""
Tests for selector.py

The selector must never repeat the current image when there is another one to
pick, must still work with a single image and must favour newer images.
"""

import unittest.mock
from collections import Counter

import pytest

from bingwall.image_data import ImageData
from bingwall.image_data import file_name

# following entities are tested in this module:
from bingwall.selector import select_image
from bingwall.selector import EmptyCatalogError


def test_select_empty_catalog():
    with pytest.raises(EmptyCatalogError):
        select_image(ImageData(), None, "UHD", "jpg")


def test_select_empty_catalog_with_dangling_current():
    with pytest.raises(EmptyCatalogError):
        select_image(ImageData(), "abc_OHR.Gone_UHD.jpg", "UHD", "jpg")


def test_select_returns_a_catalog_file_name(remote):
    names = {file_name(image, "UHD", "jpg") for image in remote}

    assert select_image(remote, None, "UHD", "jpg") in names


def test_select_never_repeats_current(remote):
    current = file_name(remote.latest(), "UHD", "jpg")

    picks = {select_image(remote, current, "UHD", "jpg") for _ in range(500)}

    assert current not in picks
    assert len(picks) == 2


def test_select_two_images_alternates(make_image):
    image_data = ImageData([make_image("aaa", day=1), make_image("bbb", day=2)])
    first, second = (file_name(image, "UHD", "jpg") for image in image_data.sorted())

    current = first
    for _ in range(50):
        picked = select_image(image_data, current, "UHD", "jpg")
        assert picked == (second if current == first else first)
        current = picked


def test_select_singleton_current(make_image):
    image_data = ImageData([make_image("abc")])
    current = file_name(make_image("abc"), "UHD", "jpg")

    assert select_image(image_data, current, "UHD", "jpg") == current


def test_select_file_names_follow_size(remote):
    assert select_image(remote, None, "1920x1080", "webp").endswith("_1920x1080.webp")


def test_select_weights_by_position(remote):
    """
    Candidates are weighted 1, 2, 3... from oldest to newest.
    """

    with unittest.mock.patch("bingwall.selector.random.choices", autospec=True) as mock_choices:
        mock_choices.side_effect = lambda candidates, weights: [candidates[-1]]

        picked = select_image(remote, None, "UHD", "jpg")

        candidates = mock_choices.call_args.args[0]
        weights = mock_choices.call_args.kwargs["weights"]

    assert [image.hash for image in candidates] == ["aaa", "bbb", "ccc"]
    assert list(weights) == [1, 2, 3]
    assert picked == file_name(remote.latest(), "UHD", "jpg")


def test_select_prefers_newer_images(remote):
    counts = Counter(select_image(remote, None, "UHD", "jpg") for _ in range(3000))
    oldest, middle, newest = (file_name(image, "UHD", "jpg") for image in remote.sorted())

    assert counts[newest] > counts[middle] > counts[oldest] > 0
