"""
Handles authentication with egghead.io: anti-forgery token retrieval, the
credential form submission and the access token lookup.
"""

import asyncio
import logging

import aiohttp

from egghead_cli.exceptions import AuthenticationRejected, CsrfTokenMissing
from egghead_cli.models.session import Credentials, Session
from egghead_cli.web.extractor import Extractor

from .client import EggheadClient

log = logging.getLogger(__name__)


class SessionAuthenticator:
    """
    Exchanges credentials for an authenticated Session.
    """

    def __init__(self, client: EggheadClient, extractor: Extractor | None = None):
        """
        Initializes the authenticator.

        Args:
            client: The HTTP client whose cookie jar will hold the signed-in state.
            extractor: Parser for the sign-in and membership pages.
        """
        self._client = client
        self._extractor = extractor or Extractor()

    async def authenticate(self, credentials: Credentials) -> Session:
        """
        Signs in and returns the resulting Session.

        Raises:
            CsrfTokenMissing: The sign-in page carried no anti-forgery token.
            AuthenticationRejected: The credentials did not produce a session
                with an access token.
        """
        log.info(f"Authenticating as: {credentials.email}")

        login_url = self._client.url("login")
        try:
            login_page = await self._client.get_text(login_url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AuthenticationRejected(
                f"Could not reach the sign-in page: {e}"
            ) from e

        csrf_token = self._extractor.extract_csrf_token(login_page)
        if not csrf_token:
            raise CsrfTokenMissing()

        form = {
            "authenticity_token": csrf_token,
            "user[email]": credentials.email,
            "user[password]": credentials.password,
            "utf8": "✓",
        }
        try:
            await self._client.post_form(login_url, form)
            membership_page = await self._client.get_text(
                self._client.url("membership")
            )
        except aiohttp.ClientResponseError as e:
            raise AuthenticationRejected(
                f"Sign-in was rejected (HTTP {e.status}). Check your email and password."
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise AuthenticationRejected(f"Sign-in failed: {e}") from e

        access_token = self._extractor.extract_access_token(membership_page)
        if not access_token:
            raise AuthenticationRejected(
                "Signed in, but no access token was found. "
                "The account may not have an active membership."
            )

        log.debug(f"Access token found: {access_token[:4]}...")
        return Session(
            credentials=credentials, access_token=access_token, client=self._client
        )
