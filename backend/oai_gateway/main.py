import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, List
import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import EnvDefaults, cors_allow_origins, get_env_defaults
from .errors import GatewayError
from .providers.openai_compat import OpenAICompatClient
from .router import chat_generate, list_models
from .schemas import Access, ChatGenerateRequest, ChatResult, ModelDescription


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield


app = FastAPI(title="OpenAI Gateway", version="0.1.0", lifespan=lifespan)

# frontend dev origin by default
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def get_upstream_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=get_env_defaults().timeout) as client:
        yield client


def get_upstream(
    client: httpx.AsyncClient = Depends(get_upstream_client),
    defaults: EnvDefaults = Depends(get_env_defaults),
) -> OpenAICompatClient:
    return OpenAICompatClient(client=client, defaults=defaults)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    return JSONResponse(
        status_code=exc.http_status,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


@app.post("/api/openai/listModels", response_model=List[ModelDescription])
async def list_models_endpoint(access: Access, upstream: OpenAICompatClient = Depends(get_upstream)):
    return await list_models(upstream, access)


@app.post("/api/openai/chatGenerate", response_model=ChatResult)
async def chat_generate_endpoint(req: ChatGenerateRequest, upstream: OpenAICompatClient = Depends(get_upstream)):
    return await chat_generate(upstream, req.access, req.model, req.history)


@app.get("/health")
def health():
    return {"ok": True}
