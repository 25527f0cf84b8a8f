"""Pydantic models for Codex accounts, auth files and ID token claims."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Namespaced claims carried by ChatGPT-issued ID tokens
OPENAI_AUTH_CLAIM = "https://api.openai.com/auth"
OPENAI_PROFILE_CLAIM = "https://api.openai.com/profile"


def _clean_string(value: Any) -> str | None:
    """Return a trimmed string, or None for non-strings and blank strings."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _object_or_none(value: Any) -> Any:
    return value if isinstance(value, dict) else None


class CodexAccount(BaseModel):
    """A Codex account backed by one directory under the accounts folder.

    The directory name is the account id; there is no separate index.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Account id and directory name")
    email: str | None = Field(default=None, description="Email derived from auth.json")
    path: Path = Field(..., description="Directory holding the account credentials")

    @property
    def display_name(self) -> str:
        """Email when known, otherwise the account id."""
        return self.email or self.id


class AccountInfo(BaseModel):
    """Identity metadata derived from an account's ID token."""

    model_config = ConfigDict(frozen=True)

    email: str | None = None
    plan: str | None = None


class AuthTokens(BaseModel):
    """The `tokens` object of a Codex `auth.json` file."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id_token: str | None = None

    @model_validator(mode="before")
    @classmethod
    def accept_either_casing(cls, data: Any) -> Any:
        """Read the ID token from `idToken`, falling back to `id_token`."""
        if not isinstance(data, dict):
            return data
        for key in ("idToken", "id_token"):
            token = data.get(key)
            if isinstance(token, str):
                return {"id_token": token}
        return {"id_token": None}


class AuthFile(BaseModel):
    """Subset of the Codex CLI `auth.json` document read by the store."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    tokens: AuthTokens | None = None


class ProfileClaims(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    email: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, v: Any) -> str | None:
        return _clean_string(v)


class AuthClaims(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    chatgpt_plan_type: str | None = None

    @field_validator("chatgpt_plan_type", mode="before")
    @classmethod
    def clean_plan(cls, v: Any) -> str | None:
        return _clean_string(v)


class IdTokenClaims(BaseModel):
    """Typed view over the claims of a decoded ID token payload.

    Claims of an unexpected JSON type are treated as absent instead of
    failing validation, so one malformed claim never hides the others.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    email: str | None = None
    chatgpt_plan_type: str | None = None
    profile: ProfileClaims | None = Field(default=None, alias=OPENAI_PROFILE_CLAIM)
    auth: AuthClaims | None = Field(default=None, alias=OPENAI_AUTH_CLAIM)

    @field_validator("email", "chatgpt_plan_type", mode="before")
    @classmethod
    def clean_strings(cls, v: Any) -> str | None:
        return _clean_string(v)

    @field_validator("profile", "auth", mode="before")
    @classmethod
    def require_objects(cls, v: Any) -> Any:
        return _object_or_none(v)

    @property
    def resolved_email(self) -> str | None:
        """Top-level email, falling back to the profile claim."""
        if self.email:
            return self.email
        return self.profile.email if self.profile else None

    @property
    def resolved_plan(self) -> str | None:
        """Plan from the auth claim, falling back to the top-level claim."""
        if self.auth and self.auth.chatgpt_plan_type:
            return self.auth.chatgpt_plan_type
        return self.chatgpt_plan_type

    def to_account_info(self) -> AccountInfo:
        return AccountInfo(email=self.resolved_email, plan=self.resolved_plan)
