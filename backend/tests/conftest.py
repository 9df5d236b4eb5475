import sys
from pathlib import Path
from typing import AsyncIterator, Callable

import httpx
import pytest

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from oai_gateway.config import EnvDefaults  # noqa: E402
from oai_gateway.providers.openai_compat import OpenAICompatClient  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def defaults() -> EnvDefaults:
    return EnvDefaults(api_key="env-key")


@pytest.fixture
async def make_upstream(defaults, anyio_backend) -> AsyncIterator[Callable[..., OpenAICompatClient]]:
    """Build OpenAICompatClients whose requests are answered by `handler`."""
    clients = []

    def _make(handler, env: EnvDefaults = None) -> OpenAICompatClient:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return OpenAICompatClient(client=client, defaults=env or defaults)

    yield _make
    for client in clients:
        await client.aclose()
