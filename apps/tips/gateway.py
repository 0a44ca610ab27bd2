"""
Midtrans payment gateway client.

Talks to the Snap API (hosted payment page) and the Core status API
using the venue's own merchant credentials; the platform never holds
settlement funds.
"""

import hashlib
import hmac
import logging
from typing import Any, Dict, List, Optional

import httpx
from django.conf import settings

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Midtrans call failed (network, HTTP error or malformed response)."""


class MidtransClient:
    """
    Synchronous Midtrans client for one merchant account.

    Args:
        server_key: Merchant server key (basic auth username).
        environment: ``'sandbox'`` or ``'production'``.
        transport: Optional httpx transport, used by tests.
    """

    SANDBOX_SNAP_URL = "https://app.sandbox.midtrans.com/snap/v1/transactions"
    PRODUCTION_SNAP_URL = "https://app.midtrans.com/snap/v1/transactions"
    SANDBOX_API_BASE = "https://api.sandbox.midtrans.com/v2"
    PRODUCTION_API_BASE = "https://api.midtrans.com/v2"

    def __init__(
        self,
        server_key: str,
        environment: str = 'sandbox',
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._server_key = server_key
        self._production = environment == 'production'
        self._timeout = timeout if timeout is not None else settings.MIDTRANS_TIMEOUT_SECONDS
        self._transport = transport

    @classmethod
    def for_venue(cls, venue, **kwargs) -> 'MidtransClient':
        return cls(
            server_key=venue.midtrans_server_key,
            environment=venue.midtrans_environment,
            **kwargs
        )

    @property
    def snap_url(self) -> str:
        return self.PRODUCTION_SNAP_URL if self._production else self.SANDBOX_SNAP_URL

    @property
    def api_base(self) -> str:
        return self.PRODUCTION_API_BASE if self._production else self.SANDBOX_API_BASE

    def _client(self) -> httpx.Client:
        return httpx.Client(
            auth=(self._server_key, ''),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=self._timeout,
            transport=self._transport,
        )

    def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        try:
            with self._client() as client:
                resp = client.request(method, url, **kwargs)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as e:
            raise GatewayError(
                f"Midtrans returned HTTP {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise GatewayError(f"Midtrans request failed: {e}") from e

    # ------------------------------------------------------------------
    # Snap
    # ------------------------------------------------------------------

    def create_snap_transaction(
        self,
        *,
        order_id: str,
        gross_amount: int,
        item_details: List[Dict[str, Any]],
        callbacks: Dict[str, str],
    ) -> Dict[str, str]:
        """
        Open a hosted payment page.

        Returns:
            dict with ``token`` and ``redirect_url``.
        """
        payload = {
            "transaction_details": {
                "order_id": order_id,
                "gross_amount": gross_amount,
            },
            "item_details": item_details,
            "callbacks": callbacks,
        }
        data = self._request("POST", self.snap_url, json=payload)

        if not data.get("token") or not data.get("redirect_url"):
            raise GatewayError(f"Midtrans Snap response missing token: {data}")

        return {"token": data["token"], "redirect_url": data["redirect_url"]}

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_transaction_status(self, order_id: str) -> Dict[str, Any]:
        """Current status of an order (``transaction_status``, ``fraud_status``...)."""
        return self._request("GET", f"{self.api_base}/{order_id}/status")

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    @staticmethod
    def compute_signature(order_id: str, status_code: str, gross_amount: str, server_key: str) -> str:
        raw = f"{order_id}{status_code}{gross_amount}{server_key}"
        return hashlib.sha512(raw.encode("utf-8")).hexdigest()

    def verify_signature(self, payload: Dict[str, Any]) -> bool:
        """Check ``signature_key`` of an HTTP notification body."""
        signature = payload.get("signature_key")
        if not signature or not self._server_key:
            return False

        expected = self.compute_signature(
            str(payload.get("order_id", "")),
            str(payload.get("status_code", "")),
            str(payload.get("gross_amount", "")),
            self._server_key,
        )
        return hmac.compare_digest(expected, str(signature))
