import pytest
from aiohttp import web
from conftest import serve

from egghead_cli.api.auth import SessionAuthenticator
from egghead_cli.api.client import EggheadClient
from egghead_cli.exceptions import (
    AuthenticationError,
    AuthenticationRejected,
    CsrfTokenMissing,
)
from egghead_cli.models.session import Credentials

SIGN_IN_PAGE = '<html><head><meta name="csrf-token" content="csrf-42"></head></html>'
MEMBERSHIP_PAGE = (
    '<a href="/courses/any/course_feed?user_email=dev%40example.com'
    '&user_token=feed-token">RSS</a>'
)
CREDENTIALS = Credentials(email="dev@example.com", password="hunter2")


def _site(sign_in_page=SIGN_IN_PAGE, membership_page=MEMBERSHIP_PAGE, posts=None):
    posts = posts if posts is not None else []

    async def sign_in_get(request):
        return web.Response(text=sign_in_page, content_type="text/html")

    async def sign_in_post(request):
        form = await request.post()
        posts.append(dict(form))
        if (
            form.get("authenticity_token") != "csrf-42"
            or form.get("user[password]") != "hunter2"
        ):
            return web.Response(status=401, text="Invalid email or password.")
        raise web.HTTPFound("/")

    async def home(request):
        return web.Response(text="welcome", content_type="text/html")

    async def membership(request):
        return web.Response(text=membership_page, content_type="text/html")

    app = web.Application()
    app.router.add_get("/users/sign_in", sign_in_get)
    app.router.add_post("/users/sign_in", sign_in_post)
    app.router.add_get("/", home)
    app.router.add_get("/users/edit", membership)
    return app


def _authenticate(app, credentials=CREDENTIALS):
    async def scenario(server):
        async with EggheadClient(base_url=str(server.make_url("/"))) as client:
            return await SessionAuthenticator(client).authenticate(credentials)

    return serve(app, scenario)


def test_authenticate_returns_session_with_access_token() -> None:
    posts = []

    session = _authenticate(_site(posts=posts))

    assert session.is_authenticated
    assert session.access_token == "feed-token"
    assert session.credentials == CREDENTIALS
    assert posts == [
        {
            "authenticity_token": "csrf-42",
            "user[email]": "dev@example.com",
            "user[password]": "hunter2",
            "utf8": "✓",
        }
    ]


def test_authenticate_without_csrf_token_fails_before_posting() -> None:
    posts = []

    with pytest.raises(CsrfTokenMissing):
        _authenticate(_site(sign_in_page="<html></html>", posts=posts))
    assert posts == []


def test_authenticate_with_wrong_password_is_rejected() -> None:
    with pytest.raises(AuthenticationRejected, match="401"):
        _authenticate(_site(), Credentials(email="dev@example.com", password="nope"))


def test_authenticate_without_access_token_is_rejected() -> None:
    with pytest.raises(AuthenticationRejected):
        _authenticate(_site(membership_page="<p>No membership</p>"))


def test_authentication_errors_share_a_base_class() -> None:
    assert issubclass(CsrfTokenMissing, AuthenticationError)
    assert issubclass(AuthenticationRejected, AuthenticationError)
