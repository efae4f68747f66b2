import httpx
import logging
from typing import Optional
from lendtrack.configs import API_URL, AUTH_TOKEN, LENDTRACK_HTTP_HEADERS

logger = logging.getLogger(__name__)

class LendTrackClient:

    API_URL = API_URL
    HTTP_HEADERS = LENDTRACK_HTTP_HEADERS
    TIMEOUT = 30
    # Swapped for an httpx.MockTransport in tests
    TRANSPORT = None

    @classmethod
    def _client(cls) -> httpx.Client:
        return httpx.Client(
            base_url=cls.API_URL,
            headers=cls.HTTP_HEADERS,
            timeout=cls.TIMEOUT,
            transport=cls.TRANSPORT,
        )

    @classmethod
    def snapshot(cls) -> dict:
        """Returns the `{ok, snapshot}` envelope, or `{ok: False, message}`."""
        try:
            with cls._client() as client:
                response = client.get("/actions")
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching snapshot from LendTrack: {e}")
            return {"ok": False, "message": str(e)}

    @classmethod
    def execute(cls, action: str, payload: dict, token: Optional[str] = None) -> dict:
        headers = {"Authorization": f"Bearer {token or AUTH_TOKEN or ''}"}
        try:
            with cls._client() as client:
                response = client.post(
                    "/actions",
                    json={"action": action, "payload": payload},
                    headers=headers,
                )
                logger.info(f"Action {action!r} response: {response.status_code}")
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error running {action!r} on LendTrack: {e}")
            return {"ok": False, "message": str(e)}

    @classmethod
    def checkout(cls, item_id: int, patron_name: str, token: Optional[str] = None) -> dict:
        return cls.execute("checkout", {"itemId": item_id, "patronName": patron_name}, token=token)

    @classmethod
    def return_item(cls, item_id: int, token: Optional[str] = None) -> dict:
        return cls.execute("return", {"itemId": item_id}, token=token)
