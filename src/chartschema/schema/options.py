from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal

from ..core.runtime.env import getenv, getenv_flag
from ..errors import ConfigError

LogFormat = Literal["text", "json"]

SKIPPABLE_FIELDS = ("title", "description", "required", "default", "additionalProperties")


@dataclass(frozen=True)
class SkipAutoGenerationConfig:
    """Schema fields the transformer must not fill in on its own."""

    title: bool = False
    description: bool = False
    required: bool = False
    default: bool = False
    additional_properties: bool = False

    @classmethod
    def from_fields(cls, names: Iterable[str]) -> SkipAutoGenerationConfig:
        wanted = [name.strip() for name in names if name.strip()]
        invalid = [name for name in wanted if name not in SKIPPABLE_FIELDS]
        if invalid:
            raise ConfigError(
                "unsupported field names '{}' for skipping auto-generation".format("', '".join(invalid))
            )
        return cls(
            title="title" in wanted,
            description="description" in wanted,
            required="required" in wanted,
            default="default" in wanted,
            additional_properties="additionalProperties" in wanted,
        )


@dataclass(frozen=True)
class BuildOptions:
    keep_full_comment: bool = False
    keep_helm_docs_prefix: bool = False
    skip: SkipAutoGenerationConfig = field(default_factory=SkipAutoGenerationConfig)
    log_json: bool = False
    verbose: bool = False

    @classmethod
    def from_args(
        cls,
        keep_full_comment: bool = False,
        keep_helm_docs_prefix: bool = False,
        skip_fields: Iterable[str] = (),
        log_format: LogFormat | None = None,
        verbose: bool | None = None,
    ) -> BuildOptions:
        resolved_format = log_format or getenv("CHARTSCHEMA_LOG_FORMAT", "text")
        if resolved_format not in ("text", "json"):
            raise ConfigError(f"unsupported log format '{resolved_format}' (expected text or json)")
        return cls(
            keep_full_comment=keep_full_comment,
            keep_helm_docs_prefix=keep_helm_docs_prefix,
            skip=SkipAutoGenerationConfig.from_fields(skip_fields),
            log_json=resolved_format == "json",
            verbose=getenv_flag("CHARTSCHEMA_VERBOSE") if verbose is None else verbose,
        )
