from __future__ import annotations

import json
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

ENV_FILE = Path(".env")

OPTIONS_SECTION = "R2Options"

REQUIRED_FIELDS: tuple[str, ...] = (
    "public_endpoint",
    "access_key_id",
    "secret_access_key",
    "endpoint",
)

# settings-file key -> R2Options attribute
_SECTION_KEYS: dict[str, str] = {
    "PublicEndpoint": "public_endpoint",
    "Endpoint": "endpoint",
    "AccessKeyId": "access_key_id",
    "SecretAccessKey": "secret_access_key",
    "BucketName": "bucket_name",
    "Region": "region",
    "AddressingStyle": "addressing_style",
}


def _load_env_file() -> None:
    if not ENV_FILE.exists():
        return
    for raw_line in ENV_FILE.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


@dataclass(frozen=True)
class R2Options:
    """Connection options for a Cloudflare R2 (S3-compatible) account.

    Values are not validated here; ``R2Client`` rejects missing required
    fields at construction time.
    """

    public_endpoint: str | None = None
    endpoint: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None
    bucket_name: str | None = None
    region: str = "auto"
    addressing_style: str = "path"

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def __repr__(self) -> str:
        secret = "***" if self.secret_access_key else None
        return (
            f"R2Options(public_endpoint={self.public_endpoint!r}, "
            f"endpoint={self.endpoint!r}, access_key_id={self.access_key_id!r}, "
            f"secret_access_key={secret!r}, bucket_name={self.bucket_name!r}, "
            f"region={self.region!r}, addressing_style={self.addressing_style!r})"
        )

    @classmethod
    def from_environment(cls) -> "R2Options":
        _load_env_file()
        return cls(
            public_endpoint=os.environ.get("R2_PUBLIC_ENDPOINT"),
            endpoint=os.environ.get("R2_ENDPOINT"),
            access_key_id=os.environ.get("R2_ACCESS_KEY_ID"),
            secret_access_key=os.environ.get("R2_SECRET_ACCESS_KEY"),
            bucket_name=os.environ.get("R2_BUCKET_NAME") or None,
            region=os.environ.get("R2_REGION", cls.region),
            addressing_style=os.environ.get("R2_ADDRESSING_STYLE", cls.addressing_style),
        )

    @classmethod
    def from_mapping(cls, section: Mapping[str, Any]) -> "R2Options":
        """Build options from an ``R2Options`` settings block.

        Keys use the settings-file spelling (``PublicEndpoint``,
        ``AccessKeyId``...); unknown keys are ignored.
        """
        values: dict[str, Any] = {}
        for key, attribute in _SECTION_KEYS.items():
            value = section.get(key)
            if value is not None:
                values[attribute] = str(value)
        return cls(**values)


def load_options_file(
    prefix: str,
    env: str | None = None,
    base_path: str | os.PathLike[str] | None = None,
) -> R2Options:
    """Load the ``R2Options`` block from layered JSON settings files.

    Reads ``<prefix>.json`` then ``<prefix>.<env>.json`` from ``base_path``
    (default: current directory). Both files are optional; values in the
    environment-specific file win.
    """
    root = Path(base_path) if base_path else Path.cwd()
    names = [f"{prefix}.json"]
    if env:
        names.append(f"{prefix}.{env}.json")

    merged: dict[str, Any] = {}
    for name in names:
        path = root / name
        if not path.exists():
            continue
        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"{path} must contain a JSON object")
        merged = _merge(merged, payload)

    section = merged.get(OPTIONS_SECTION) or {}
    if not isinstance(section, Mapping):
        raise ValueError(f"{OPTIONS_SECTION} must be a JSON object")
    return R2Options.from_mapping(section)


@lru_cache(maxsize=1)
def get_options() -> R2Options:
    return R2Options.from_environment()
