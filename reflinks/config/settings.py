"""Configuration models loaded from YAML."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator

from ..utils.logging_config import LogLevel

DEFAULT_USER_AGENT = "Reflinks/1.0 (bare reference filler)"
DEFAULT_SUMMARY = "Filled in %numfixed% bare reference(s), skipped %numskipped%"

# Standard logging names mapped onto the console levels
_STANDARD_LEVELS = {
    "debug": LogLevel.DETAILED,
    "info": LogLevel.NORMAL,
    "warning": LogLevel.MINIMAL,
    "warn": LogLevel.MINIMAL,
    "error": LogLevel.MINIMAL,
    "critical": LogLevel.MINIMAL,
}


class ReflinksOptions(BaseModel):
    """Options consumed by the classifier, generators and fixer."""

    disable_captioned_bracket: bool = Field(
        default=False, description="Leave '[url caption]' references untouched."
    )
    disable_uncaptioned_bracket: bool = Field(
        default=False, description="Leave '[url]' references untouched."
    )
    disable_minimal_template: bool = Field(
        default=False, description="Leave '{{cite web|url=...}}' references untouched."
    )
    prefer_plain_citation_style: bool = Field(
        default=False, description="Render plain CS1-style text instead of {{cite web}}."
    )
    suppress_bare_url_tag_cleanup: bool = Field(
        default=False, description="Keep {{Bare URLs}} cleanup templates in the output."
    )
    include_access_date: bool = True
    use_author: bool = True
    use_date: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    request_timeout: float = Field(gt=0, default=10.0)
    max_fetch_attempts: int = Field(ge=1, le=5, default=2)
    default_wiki: str = "en"
    summary: str = DEFAULT_SUMMARY
    spam_blacklist: List[str] = Field(default_factory=list)


class LoggingSettings(BaseModel):
    level: LogLevel = LogLevel.NORMAL
    log_to_file: bool = False
    log_file: str = "logs/reflinks.log"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: object) -> object:
        """Accept the console levels in any case, plus standard logging names."""
        if isinstance(v, str):
            name = v.strip().lower()
            return _STANDARD_LEVELS.get(name, name)
        return v


class AppConfig(BaseModel):
    options: ReflinksOptions = Field(default_factory=ReflinksOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
