# path: config/loader.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path(__file__).parent / "default.yaml"
PROFILE_PATH = Path(__file__).parent / "profile.yaml"


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        doc = yaml.safe_load(path.read_text())
    except Exception as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    return doc if isinstance(doc, dict) else {}


def _map_yaml_to_env_keys(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Return a dict used as the lowest-precedence settings source.

    Includes both:
      • flat mirrors of the BACKOFF_* / LOG_LEVEL env keys, and
      • the nested ``connection_retry`` section, bound directly to
        ConnectionRetryStrategy.
    """
    out: Dict[str, Any] = {}

    if isinstance(doc.get("connection_retry"), dict):
        out["connection_retry"] = doc["connection_retry"]

    # values pass through raw; Settings coerces them and reports bad ones
    backoff = doc.get("backoff")
    if isinstance(backoff, dict):
        for key, field in (
            ("exponent_base", "BACKOFF_EXPONENT_BASE"),
            ("factor_ms", "BACKOFF_FACTOR_MS"),
            ("retries", "BACKOFF_RETRIES"),
        ):
            if key in backoff:
                out[field] = backoff[key]

    log = doc.get("logging")
    if isinstance(log, dict) and "level" in log:
        out["LOG_LEVEL"] = log["level"]

    env = doc.get("env")
    if isinstance(env, str) and env.strip():
        out["ENV"] = env.strip().lower()

    return out


def yaml_settings_source() -> Dict[str, Any]:
    base = _map_yaml_to_env_keys(_read_yaml(DEFAULT_PATH))
    prof_doc = _read_yaml(PROFILE_PATH)
    profile = _map_yaml_to_env_keys(prof_doc) if prof_doc else {}
    base.update(profile)
    return base
