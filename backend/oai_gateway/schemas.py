from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

Role = Literal["assistant", "system", "user"]


class Access(BaseModel):
    """
    Caller-supplied credentials. Empty fields fall back to the server environment.
    """
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    api_key: str = Field("", alias="oaiKey")
    organization_id: str = Field("", alias="oaiOrg")
    api_host: str = Field("", alias="oaiHost")
    proxy_auth_key: str = Field("", alias="heliKey")


class ModelSelector(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="model id")
    temperature: Optional[float] = Field(None, ge=0, le=1)
    max_tokens: Optional[int] = Field(None, ge=1, le=100000, alias="maxTokens")


class ChatMessage(BaseModel):
    role: Role
    content: str


class ChatGenerateRequest(BaseModel):
    access: Access = Field(default_factory=Access)
    model: ModelSelector
    history: List[ChatMessage]


class ModelDescription(BaseModel):
    # upstream owns this shape, keep whatever else it sends
    model_config = ConfigDict(extra="allow")

    id: str


class ChatResult(BaseModel):
    role: str
    content: Optional[str] = None
    finish_reason: Optional[str] = None
