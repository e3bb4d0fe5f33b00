import json
import logging

import httpx

from errors import SheetAPIError

logger = logging.getLogger(__name__)


class SheetClient:
    """Reads and writes the score sheet's Apps Script web app.

    One request per call; there is no retry or polling.
    """

    def __init__(self, base_url, timeout=15.0, transport=None):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    def _client(self):
        # Apps Script answers through a redirect to googleusercontent.com
        return httpx.Client(timeout=self.timeout, follow_redirects=True, transport=self.transport)

    def fetch(self):
        """GET the sheet payload: a dict with optional ``config`` and ``students``."""
        try:
            with self._client() as client:
                r = client.get(self.base_url)
                r.raise_for_status()
                payload = r.json()
        except httpx.HTTPStatusError as e:
            logger.error("Score sheet read failed with HTTP %s", e.response.status_code)
            raise SheetAPIError('score sheet read failed', e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("Score sheet read failed: %s", e)
            raise SheetAPIError(f'score sheet read failed: {e}') from e
        except ValueError as e:
            logger.error("Score sheet returned a non-JSON body: %s", e)
            raise SheetAPIError('score sheet returned invalid JSON') from e

        if not isinstance(payload, dict):
            raise SheetAPIError('score sheet payload is not an object')
        return payload

    def update_config(self, config):
        """POST an updateConfig action carrying the full display config."""
        body = {'action': 'updateConfig', 'config': config.to_wire()}
        # Apps Script reads the raw post body
        headers = {'Content-Type': 'text/plain;charset=utf-8'}
        content = json.dumps(body, ensure_ascii=False).encode('utf-8')
        try:
            with self._client() as client:
                r = client.post(self.base_url, content=content, headers=headers)
                r.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Score sheet config update failed with HTTP %s", e.response.status_code)
            raise SheetAPIError('score sheet config update failed', e.response.status_code) from e
        except httpx.HTTPError as e:
            logger.error("Score sheet config update failed: %s", e)
            raise SheetAPIError(f'score sheet config update failed: {e}') from e
        logger.info("Pushed display config to score sheet")
