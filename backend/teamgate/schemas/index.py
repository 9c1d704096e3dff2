"""Index Schemas — request models for the three index actions.

Invariants:
    - action matches ^[\\w-]+$; unknown-but-well-formed actions reach dispatch
    - logo matches ^[\\w+\\-/]+={0,2}$ (a logo name or a base64 payload)
    - token matches ^\\w+$; anything else (including "") is treated as absent
    - names/emails arrive as JSON-encoded arrays of strings and are decoded here

Design Decisions:
    - IndexRequest keeps unknown fields (extra="allow") so one endpoint can carry
      any action; the per-action models validate only what the action needs
    - camelCase aliases (isCustomLogo, logoType) preserve the client form names
"""

import json
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_TOKEN_RE = re.compile(r"^\w+$")


class IndexRequest(BaseModel):
    """Envelope: action name plus flat parameters."""
    model_config = ConfigDict(extra="allow")

    action: str = Field(pattern=r"^[\w-]+$", max_length=64)

    def params(self) -> dict:
        return dict(self.model_extra or {})


class RegisterTeamParams(BaseModel):
    """register_team — registration without roster."""
    model_config = ConfigDict(populate_by_name=True)

    teamname: str = Field(max_length=1000)
    password: str = Field(max_length=1000)
    token: str | None = None
    logo: str = Field(pattern=r"^[\w+\-/]+={0,2}$")
    is_custom_logo: bool = Field(alias="isCustomLogo")
    logo_type: str | None = Field(None, alias="logoType", max_length=50)

    @field_validator("token", mode="before")
    @classmethod
    def drop_malformed_token(cls, v: object) -> str | None:
        if isinstance(v, str) and _TOKEN_RE.match(v):
            return v
        return None


class RegisterNamesParams(RegisterTeamParams):
    """register_names — registration with roster names and emails."""
    names: list[str]
    emails: list[str]

    @field_validator("names", "emails", mode="before")
    @classmethod
    def decode_json_array(cls, v: object) -> object:
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except json.JSONDecodeError:
                raise ValueError("names and emails should be JSON arrays")
        if not isinstance(v, list):
            raise ValueError("names and emails should be arrays")
        return v


class LoginTeamParams(BaseModel):
    """login_team — by team_id or by teamname depending on login_select."""
    team_id: int | None = None
    teamname: str | None = Field(None, max_length=1000)
    password: str = Field(max_length=1000)
