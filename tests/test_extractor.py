from conftest import CATALOG_HTML, FEED_XML

from egghead_cli.web.extractor import Extractor


def test_extract_csrf_token() -> None:
    page = '<html><head><meta name="csrf-token" content="abc==" /></head></html>'
    assert Extractor().extract_csrf_token(page) == "abc=="


def test_extract_csrf_token_missing() -> None:
    assert Extractor().extract_csrf_token("<html><head></head></html>") == ""
    assert (
        Extractor().extract_csrf_token('<meta name="csrf-token" content="">') == ""
    )


def test_extract_access_token_from_feed_link() -> None:
    page = (
        '<a href="/courses/x/course_feed?user_email=a%40b.c&user_token=T0KEN">RSS</a>'
    )
    assert Extractor().extract_access_token(page) == "T0KEN"


def test_extract_access_token_from_data_attribute() -> None:
    page = '<div id="profile" data-user-token="attr-token"></div>'
    assert Extractor().extract_access_token(page) == "attr-token"


def test_extract_access_token_missing() -> None:
    assert Extractor().extract_access_token("<p>Sign up for a membership</p>") == ""


def test_extract_catalog_keeps_page_order() -> None:
    technologies = Extractor().extract_catalog(CATALOG_HTML)

    assert [t.name for t in technologies] == ["Vue", "React"]
    react = technologies[1]
    assert [c.name for c in react.courses] == ["Redux Basics", "Hooks in Depth"]
    assert react.courses[0].url == "https://egghead.io/courses/redux-basics"
    assert react.courses[1].lesson_count == 12


def test_extract_catalog_unparsable_lesson_count_is_zero() -> None:
    vue = Extractor().extract_catalog(CATALOG_HTML)[0]
    assert vue.courses[0].lesson_count == 0


def test_extract_feed_items_numbers_every_item() -> None:
    items = Extractor().extract_feed_items(FEED_XML)

    assert [item.ordinal for item in items] == [1, 2, 3]
    assert [item.title for item in items] == ["Introduction", "Reducers", "Store"]
    assert items[0].enclosure_url == "https://cdn.example.com/redux/01.mp4"
    assert items[1].enclosure_url == ""


def test_extract_feed_items_empty_feed() -> None:
    assert Extractor().extract_feed_items("<rss><channel></channel></rss>") == []
