import pytest

from egghead_cli.utils.formatting import format_duration, format_size, pluralize


@pytest.mark.parametrize(
    "size, expected",
    [
        (None, "unknown size"),
        (0, "0 B"),
        (512, "512.0 B"),
        (1536, "1.5 KB"),
        (145 * 1024 * 1024, "145.0 MB"),
        (3 * 1024**5, "3072.0 TB"),
    ],
)
def test_format_size(size, expected) -> None:
    assert format_size(size) == expected


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0s"), (59.9, "59s"), (60, "1m"), (3600 + 5, "1h 5s"), (9252, "2h 34m 12s")],
)
def test_format_duration(seconds, expected) -> None:
    assert format_duration(seconds) == expected


def test_pluralize() -> None:
    assert pluralize(1, "lesson") == "1 lesson"
    assert pluralize(0, "course") == "0 courses"
    assert pluralize(2, "technology", "technologies") == "2 technologies"
