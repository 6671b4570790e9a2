from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "data" / "default_config.yaml"

SECTIONS = ("paths", "registry", "selection", "files", "augment")


@dataclass(frozen=True)
class DllAugment:
    executable: str
    filter: str
    package: str


@dataclass(frozen=True)
class SystemPackageAugment:
    package: str
    filter: str
    manifest: str
    root: str


@dataclass(frozen=True)
class BuildConfig:
    raw: Dict[str, Any]

    @property
    def output_dir(self) -> str:
        return str(((self.raw.get("paths") or {}).get("output_dir")) or "windows_installer")

    @property
    def registry_prefix(self) -> Optional[str]:
        prefix = (self.raw.get("registry") or {}).get("prefix")
        return str(prefix) if prefix else None

    @property
    def selection_allow(self) -> str:
        return str((self.raw.get("selection") or {}).get("allow") or "")

    @property
    def selection_deny(self) -> str:
        return str((self.raw.get("selection") or {}).get("deny") or "")

    @property
    def default_include(self) -> str:
        return str(((self.raw.get("files") or {}).get("default_include")) or ".")

    @property
    def default_exclude(self) -> str:
        return str(((self.raw.get("files") or {}).get("default_exclude")) or r"(\.byte\.exe|\.cm[aiox]|\.cmxa|\.o)$")

    @property
    def file_rules(self) -> Dict[str, Dict[str, str]]:
        rules = (self.raw.get("files") or {}).get("rules") or {}
        if not isinstance(rules, dict):
            raise ConfigurationError("files.rules must be a mapping of package name -> {include, exclude}")
        out: Dict[str, Dict[str, str]] = {}
        for name, rule in rules.items():
            if not isinstance(rule, dict):
                raise ConfigurationError(f"files.rules.{name} must be a mapping")
            out[str(name)] = {k: str(v) for k, v in rule.items() if k in {"include", "exclude"} and v is not None}
        return out

    @property
    def use_cygpath(self) -> bool:
        return bool((self.raw.get("augment") or {}).get("cygpath", True))

    @property
    def dll_augments(self) -> List[DllAugment]:
        items = (self.raw.get("augment") or {}).get("dlls") or []
        try:
            return [DllAugment(executable=str(i["executable"]), filter=str(i["filter"]), package=str(i["package"])) for i in items]
        except (KeyError, TypeError) as e:
            raise ConfigurationError(f"augment.dlls entries need executable, filter and package: {e}") from e

    @property
    def system_package_augments(self) -> List[SystemPackageAugment]:
        items = (self.raw.get("augment") or {}).get("system_packages") or []
        try:
            return [
                SystemPackageAugment(
                    package=str(i["package"]),
                    filter=str(i["filter"]),
                    manifest=str(i["manifest"]),
                    root=str(i["root"]),
                )
                for i in items
            ]
        except (KeyError, TypeError) as e:
            raise ConfigurationError(
                f"augment.system_packages entries need package, filter, manifest and root: {e}"
            ) from e

    def with_overrides(self, overrides: Dict[str, Any]) -> "BuildConfig":
        return BuildConfig(raw=merge_config(self.raw, overrides))


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge mappings; lists and scalars in override replace base values."""

    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = merge_config(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def _load_yaml_mapping(p: Path) -> Dict[str, Any]:
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config must contain a mapping/object: {p}")
    return raw


def load_build_config(path: Optional[str] = None) -> BuildConfig:
    """Load the packaged defaults, merged with an optional user YAML file."""

    raw = _load_yaml_mapping(DEFAULT_CONFIG_PATH)
    if path is None:
        return BuildConfig(raw=raw)

    p = Path(path)
    if not p.exists():
        raise ConfigurationError(f"Config file not found: {path}")
    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigurationError("config must be YAML")

    return BuildConfig(raw=_validate(merge_config(raw, _load_yaml_mapping(p)), p))


def _validate(raw: Dict[str, Any], p: Path) -> Dict[str, Any]:
    for section in SECTIONS:
        if not isinstance(raw.get(section) or {}, dict):
            raise ConfigurationError(f"{section} must be a mapping in {p}")
    return raw
