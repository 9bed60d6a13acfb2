"""OAuth token retrieval."""

from __future__ import annotations

from typing import Any

import structlog

from payu_pl import endpoints
from payu_pl.errors import PayuError
from payu_pl.operations.base import Operation

logger = structlog.get_logger()


class OAuthToken(Operation):
    """Obtain an access token and store it on the client."""

    def __call__(self, grant_type: str = "client_credentials") -> dict[str, Any]:
        form = {
            "grant_type": grant_type,
            "client_id": self.client.client_id,
            "client_secret": self.client.client_secret,
        }
        response = self.transport.request(
            "post",
            endpoints.OAUTH_TOKEN,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            form=form,
            authorize=False,
        )

        if not isinstance(response, dict) or "access_token" not in response:
            raise PayuError("OAuth response does not contain access_token")

        self.client.access_token = response["access_token"]
        logger.info("PayU access token obtained", grant_type=grant_type, expires_in=response.get("expires_in"))
        return response
