import logging
import httpx
from typing import Any, Dict, List, Optional, Tuple

from ..config import DEFAULT_API_HOST, EnvDefaults
from ..errors import MissingCredentialError, UpstreamTransportError
from ..schemas import Access, ChatMessage, ModelSelector

logger = logging.getLogger(__name__)


def openai_access(access: Access, api_path: str, defaults: EnvDefaults) -> Tuple[Dict[str, str], str]:
    """
    Resolve headers and the full URL for one upstream call.
    Caller values win over the server environment.
    """
    api_key = access.api_key or defaults.api_key
    if not api_key:
        raise MissingCredentialError(
            "Missing OpenAI API Key. Add it on the client side (Settings) "
            "or server side (your deployment)."
        )

    org_id = access.organization_id or defaults.organization_id

    host = access.api_host or defaults.api_host or DEFAULT_API_HOST
    if not host.startswith(("http://", "https://")):
        host = f"https://{host}"
    if host.endswith("/") and api_path.startswith("/"):
        host = host[:-1]
    elif not host.endswith("/") and not api_path.startswith("/"):
        host = f"{host}/"

    proxy_key = access.proxy_auth_key or defaults.proxy_auth_key

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    if org_id:
        headers["OpenAI-Organization"] = org_id
    if proxy_key:
        headers["Helicone-Auth"] = f"Bearer {proxy_key}"
    return headers, host + api_path


def openai_completion_request(model: ModelSelector, history: List[ChatMessage], stream: bool) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": model.id,
        "messages": [m.model_dump() for m in history],
    }
    if model.temperature:
        payload["temperature"] = model.temperature
    if model.max_tokens:
        payload["max_tokens"] = model.max_tokens
    payload["stream"] = stream
    payload["n"] = 1
    return payload


def _error_message(r: httpx.Response) -> str:
    try:
        err = r.json().get("error")
    except ValueError:
        err = None
    if isinstance(err, dict) and err.get("message"):
        return f"{r.status_code} · {err['message']}"
    return f"{r.status_code} · {r.reason_phrase}"


class OpenAICompatClient:
    """
    Thin JSON wrapper over an OpenAI-compatible API:
    GET/POST {host}{path} with the resolved access headers,
    returns the decoded JSON body.
    """
    def __init__(self, client: httpx.AsyncClient, defaults: EnvDefaults):
        self.client = client
        self.defaults = defaults

    async def get(self, access: Access, api_path: str) -> Any:
        headers, url = openai_access(access, api_path, self.defaults)
        return await self._send("GET", url, headers)

    async def post(self, access: Access, body: Dict[str, Any], api_path: str) -> Any:
        headers, url = openai_access(access, api_path, self.defaults)
        return await self._send("POST", url, headers, body)

    async def _send(self, method: str, url: str, headers: Dict[str, str], body: Optional[Dict[str, Any]] = None) -> Any:
        logger.debug("upstream %s %s", method, url)
        try:
            r = await self.client.request(method, url, headers=headers, json=body)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise UpstreamTransportError(f"{type(e).__name__}: {e}") from e

        if r.status_code >= 400:
            raise UpstreamTransportError(_error_message(r), status_code=r.status_code)
        try:
            return r.json()
        except ValueError as e:
            raise UpstreamTransportError(f"Invalid JSON from upstream: {e}") from e
