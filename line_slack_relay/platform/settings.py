"""Application settings and configuration.

This module provides Pydantic settings classes for application configuration,
loaded from environment variables with support for nested configuration
(e.g. ``LINE__CHANNEL_ACCESS_TOKEN``, ``SLACK__WEBHOOK_URL``, ``LLM__MODEL``).

Credentials default to empty strings: a missing value is reported as a startup
warning through :meth:`Settings.missing_settings` instead of failing validation.
"""

import logging

import pydantic_settings
from pydantic import BaseModel, Field, field_validator


class AppHTTPSettings(BaseModel):
    url: str = Field("")
    host: str = Field("0.0.0.0")
    port: int = Field(3000)
    log_level: str = Field("INFO")
    log_json: bool | None = Field(
        None, description="Override log format: True=JSON, False=console, None=auto"
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v):
        v_upper = v.upper()
        if v_upper not in logging._nameToLevel:
            raise ValueError(f'invalid value "{v}"')
        return v_upper


class BugsnagSettings(BaseModel):
    api_key: str = Field("")
    release_stage: str = Field("local")

    @field_validator("release_stage")
    @classmethod
    def _validate_bugsnag_release_stage(cls, v):
        if v not in ["development", "production", "local"]:
            raise ValueError(f'invalid bugsnag release stage "{v}"')
        return v


class LineSettings(BaseModel):
    """LINE Messaging API channel credentials.

    Attributes:
        channel_access_token: Long-lived token used to send replies
        channel_secret: Secret used to validate the X-Line-Signature header
    """

    channel_access_token: str = Field("")
    channel_secret: str = Field("")


class SlackSettings(BaseModel):
    """Slack app configuration.

    Attributes:
        webhook_url: Incoming webhook used to deliver notifications
        bot_token: Bot token used for chat.postMessage and views.open
        signing_secret: Secret used to verify interaction requests
        app_token: App-level token (socket mode deployments)
        channel_id: Channel that receives notifications when posting with the bot token
    """

    webhook_url: str = Field("")
    bot_token: str = Field("")
    signing_secret: str = Field("")
    app_token: str = Field("")
    channel_id: str = Field("")

    @property
    def use_chat_api(self) -> bool:
        return bool(self.bot_token and self.channel_id)


class LlmSettings(BaseModel):
    api_key: str = Field("")
    model: str = Field("gpt-3.5-turbo")
    max_tokens: int = Field(500, gt=0)
    temperature: float = Field(0.7, ge=0.0, le=2.0)
    api_base: str | None = None


class DirectorySettings(BaseModel):
    """Customer directory lookup configuration.

    An empty ``base_url`` selects the in-process mock directory.
    """

    base_url: str = Field("")
    timeout: float = Field(10.0, gt=0)


class Settings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    app_http: AppHTTPSettings = AppHTTPSettings()
    bugsnag: BugsnagSettings = BugsnagSettings()

    # Messaging platform
    line: LineSettings = LineSettings()

    # Team chat
    slack: SlackSettings = SlackSettings()

    # Suggestion generation
    llm: LlmSettings = LlmSettings()

    directory: DirectorySettings = DirectorySettings()

    def missing_settings(self) -> list[str]:
        """Return the environment keys of required values that are not set."""
        required = {
            "LINE__CHANNEL_ACCESS_TOKEN": self.line.channel_access_token,
            "LINE__CHANNEL_SECRET": self.line.channel_secret,
            "SLACK__SIGNING_SECRET": self.slack.signing_secret,
            "SLACK__BOT_TOKEN": self.slack.bot_token,
            "LLM__API_KEY": self.llm.api_key,
        }
        missing = [key for key, value in required.items() if not value]
        if not self.slack.webhook_url and not self.slack.use_chat_api:
            missing.append("SLACK__WEBHOOK_URL")
        return missing
