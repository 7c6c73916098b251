import json
import os
from typing import Any, Dict, Literal, Tuple
from pydantic import BaseModel, Field, ValidationError


DEFAULT_SETTINGS = {
    "host": "0.0.0.0",
    "port": 8080,
    "log_level": "INFO",
    "timeout_keep_alive": 5,
    "timeout_graceful_shutdown": 10,
}

ENV_PREFIX = "RECEIPT_PROCESSOR_"
ENV_OVERRIDES = ("host", "port", "log_level")


class SettingsModel(BaseModel):
    host: str
    port: int = Field(ge=1, le=65535)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    timeout_keep_alive: int = Field(ge=0)
    timeout_graceful_shutdown: int = Field(ge=0)


_CACHE: Dict[str, Tuple[float, Dict[str, Any]]] = {}


def _settings_path() -> str:
    path = os.getenv(ENV_PREFIX + "CONFIG")
    if path:
        return path
    base = os.path.dirname(__file__)
    return os.path.join(base, "settings.json")


def validate_settings(data: Dict[str, Any]) -> SettingsModel:
    if isinstance(data.get("log_level"), str):
        data = {**data, "log_level": data["log_level"].upper()}
    try:
        return SettingsModel.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"invalid settings: {e}") from e


def _read_file(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    mtime = os.path.getmtime(path)
    cached = _CACHE.get(path)
    if cached and cached[0] == mtime:
        return cached[1]
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"settings file must hold a JSON object: {path}")
    _CACHE[path] = (mtime, data)
    return data


def load_settings() -> SettingsModel:
    """Defaults, then the JSON settings file if present, then environment overrides."""
    data: Dict[str, Any] = dict(DEFAULT_SETTINGS)
    data.update(_read_file(_settings_path()))
    for key in ENV_OVERRIDES:
        value = os.getenv(ENV_PREFIX + key.upper())
        if value:
            data[key] = value
    return validate_settings(data)
