import pytest

from clockwise.images import clone, flip_horizontally, flip_horizontally_clone


def test_flip_in_place_mirrors_each_row():
    image = [1, 2, 3, 4, 5, 6]
    flip_horizontally(image, 3, 2)
    assert image == [3, 2, 1, 6, 5, 4]


def test_flip_keeps_middle_of_odd_row():
    image = [10, 20, 30, 40, 50]
    flip_horizontally(image, 5, 1)
    assert image[2] == 30


def test_flip_twice_is_identity():
    original = list(range(13 * 16))
    image = list(original)
    flip_horizontally(image, 13, 16)
    assert image != original
    flip_horizontally(image, 13, 16)
    assert image == original


def test_clone_flip_matches_in_place_flip():
    original = list(range(4 * 3))
    in_place = list(original)
    flip_horizontally(in_place, 4, 3)
    assert flip_horizontally_clone(original, 4, 3) == in_place


def test_clone_flip_leaves_source_untouched():
    source = (1, 2, 3, 4)
    result = flip_horizontally_clone(source, 2, 2)
    assert source == (1, 2, 3, 4)
    assert result == [2, 1, 4, 3]


def test_clone_is_independent():
    source = [7, 8, 9]
    copy = clone(source)
    copy[0] = 0
    assert source == [7, 8, 9]
    assert copy == [0, 8, 9]


def test_short_image_is_rejected():
    with pytest.raises(ValueError):
        flip_horizontally([1, 2, 3], 2, 2)
    with pytest.raises(ValueError):
        flip_horizontally_clone([1, 2, 3], 2, 2)