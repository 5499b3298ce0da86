"""
Client OAuth GitHub / GitHub OAuth client.
Echange le code d'autorisation contre le profil utilisateur.
Exchanges the authorization code for the user profile.
"""

import logging
from urllib.parse import urlencode

import httpx

from app.config import settings
from app.exceptions import Unauthenticated
from app.schemas.auth import GitHubUser

log = logging.getLogger(__name__)

GITHUB_AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
GITHUB_TOKEN_URL = "https://github.com/login/oauth/access_token"
GITHUB_USER_URL = "https://api.github.com/user"
REQUEST_TIMEOUT_SECONDS = 10.0


def authorize_url(state: str) -> str:
    """URL de redirection vers GitHub / Redirect URL to GitHub."""
    query = urlencode({
        "client_id": settings.GITHUB_CLIENT_ID,
        "redirect_uri": settings.GITHUB_CALLBACK_URL,
        "state": state,
    })
    return f"{GITHUB_AUTHORIZE_URL}?{query}"


async def fetch_github_user(code: str) -> GitHubUser:
    """Code d'autorisation -> profil GitHub / Authorization code -> GitHub profile."""
    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS) as client:
        token_resp = await client.post(
            GITHUB_TOKEN_URL,
            data={
                "client_id": settings.GITHUB_CLIENT_ID,
                "client_secret": settings.GITHUB_CLIENT_SECRET,
                "code": code,
                "redirect_uri": settings.GITHUB_CALLBACK_URL,
            },
            headers={"Accept": "application/json"},
        )
        token_resp.raise_for_status()
        access_token = token_resp.json().get("access_token")
        if not access_token:
            log.warning("GitHub token exchange returned no access token")
            raise Unauthenticated("GitHub login failed")

        user_resp = await client.get(
            GITHUB_USER_URL,
            headers={"Authorization": f"Bearer {access_token}", "Accept": "application/vnd.github+json"},
        )
        user_resp.raise_for_status()
        return GitHubUser.model_validate(user_resp.json())
