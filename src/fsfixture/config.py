"""Manage fixture configuration loading and access."""

import os
import typing as t
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fsfixture.utils.data_utils import get_multi, merge_struct
from fsfixture.utils.fs_utils import expand_path
from fsfixture.utils.yaml_utils import yaml_safe_load_file

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default_config.yaml"
SPECIAL_ENTRY_POLICIES = ("skip", "error")


class TempDirConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    prefix: str = "fsfixture-"
    suffix: str = ""
    base_dir: str | None = None
    keep: bool = False

    @field_validator("base_dir")
    @classmethod
    def _expand_base_dir(cls, value: str | None) -> str | None:
        return expand_path(value) if value else None


class CopyConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    follow_links: bool = True
    special_entries: t.Literal["skip", "error"] = "skip"


class FixtureConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    temp_dir: TempDirConfig = Field(default_factory=TempDirConfig)
    copy_from: CopyConfig = Field(default_factory=CopyConfig)


def _load_config(config_path: str, must_exist: bool = True, merge_into: dict | None = None) -> dict[str, t.Any]:
    config_dict = yaml_safe_load_file(config_path, **({} if must_exist else {"default": {}})) or {}
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file '{config_path}' must contain a mapping, got {type(config_dict).__name__}")
    if merge_into is not None:
        config_dict = merge_struct(merge_into, config_dict)
    return config_dict


@lru_cache
def load_config() -> FixtureConfig:
    config_path = os.getenv("FSFIXTURE_CONFIG") or str(DEFAULT_CONFIG_PATH)
    config = _load_config(config_path)
    if config_override_path := os.getenv("FSFIXTURE_CONFIG_OVERRIDE"):
        config = _load_config(config_override_path, merge_into=config)
    else:
        config_override_path = str(Path.home() / ".fsfixture_config_override.yaml")
        config = _load_config(config_override_path, merge_into=config, must_exist=False)
    try:
        return FixtureConfig.model_validate(config)
    except ValidationError as e:
        raise ValueError(f"Invalid fsfixture configuration: {e}") from e


def get_config(datapath: str | None = None, default: t.Any | None = None) -> t.Any:
    config = load_config()
    return get_multi(config.model_dump(), datapath, default) if datapath else config
