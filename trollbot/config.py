from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_BOT_NAME = "trollgod"
DEFAULT_LLM_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_LLM_MODEL = "llama3-8b-8192"


class ConfigError(Exception):
    """Raised when the environment cannot produce a usable configuration."""


@dataclass(frozen=True)
class AppConfig:
    telegram_bot_token: str
    llm_api_key: str
    owner_username: str
    owner_user_id: int
    owner_info: str
    bot_name: str
    llm_base_url: str
    llm_model: str
    llm_max_tokens: int
    llm_timeout_sec: float
    memory_max_users: int
    log_level: str


def load_dotenv(path: str | Path) -> dict[str, str]:
    env_path = Path(path)
    if not env_path.exists():
        return {}
    result: dict[str, str] = {}
    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            continue
        value = value.strip()
        if len(value) >= 2 and ((value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'"))):
            value = value[1:-1]
        result[key] = value
    return result


def resolve_environment(env: Mapping[str, str], dotenv_path: str | Path) -> dict[str, str]:
    """Merge `.env` values under ``env`` when LOCAL_ENV=1.

    Variables already present in ``env`` win over the file.
    """
    merged = dict(env)
    if merged.get("LOCAL_ENV", "").strip() != "1":
        return merged
    if not Path(dotenv_path).exists():
        raise ConfigError(f"Error loading .env file: {dotenv_path} not found")
    for key, value in load_dotenv(dotenv_path).items():
        merged.setdefault(key, value)
    return merged


def _required(env: Mapping[str, str], key: str) -> str:
    value = str(env.get(key, "")).strip()
    if not value:
        raise ConfigError(f"{key} is not set")
    return value


def _int_value(env: Mapping[str, str], key: str, default: int) -> int:
    raw = str(env.get(key, "")).strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid {key}: {raw!r}") from exc


def load_config(env: Mapping[str, str] | None = None) -> AppConfig:
    raw = os.environ if env is None else env

    owner_id_raw = _required(raw, "OWNER_ID")
    try:
        owner_user_id = int(owner_id_raw)
    except ValueError as exc:
        raise ConfigError("Invalid OWNER_ID in .env") from exc

    timeout_raw = str(raw.get("LLM_TIMEOUT_SEC", "")).strip() or "30"
    try:
        llm_timeout_sec = float(timeout_raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid LLM_TIMEOUT_SEC: {timeout_raw!r}") from exc

    return AppConfig(
        telegram_bot_token=_required(raw, "TELEGRAM_BOT_TOKEN"),
        llm_api_key=_required(raw, "GROQ_API_KEY"),
        owner_username=_required(raw, "OWNER_USERNAME").lstrip("@"),
        owner_user_id=owner_user_id,
        owner_info=str(raw.get("OWNER_INFO", "")).strip(),
        bot_name=(str(raw.get("BOT_NAME", "")).strip() or DEFAULT_BOT_NAME).lower(),
        llm_base_url=str(raw.get("LLM_BASE_URL", "")).strip() or DEFAULT_LLM_BASE_URL,
        llm_model=str(raw.get("LLM_MODEL", "")).strip() or DEFAULT_LLM_MODEL,
        llm_max_tokens=_int_value(raw, "LLM_MAX_TOKENS", 100),
        llm_timeout_sec=llm_timeout_sec,
        memory_max_users=_int_value(raw, "MEMORY_MAX_USERS", 1000),
        log_level=(str(raw.get("LOG_LEVEL", "")).strip() or "INFO").upper(),
    )
