from pydantic import BaseModel, ConfigDict, Field


class CreateGameRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    metadata: str | None = None
    play_vs_ai: bool = False


class SubmitMoveRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    uci: str = Field(min_length=1, max_length=16)
    promotion: str | None = Field(default=None, max_length=8)
