"""
Centralised settings for the harvester (env-first, optional YAML file underneath).

Precedence: environment variable, then the ``harvest:`` section of the YAML file named by
``HARVEST_CONFIG_PATH``, then the defaults below.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from crawler.extractors.listing import ListingSelectors
from crawler.infra.http import DEFAULT_USER_AGENT

from newsharvest.config_loader import load_harvest_config
from newsharvest.harvester import DEFAULT_PAGE_URL_TEMPLATE

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dapo.kemdikbud.go.id/berita"
DEFAULT_SITE_ORIGIN = "https://dapo.kemdikbud.go.id"


@dataclass
class HarvestSettings:
    base_url: str = DEFAULT_BASE_URL
    site_origin: str = DEFAULT_SITE_ORIGIN
    page_url_template: str = DEFAULT_PAGE_URL_TEMPLATE
    first_page: int = 1
    last_page: int = 50
    max_concurrent: int = 50
    fetch_timeout: float = 20.0
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"
    selectors: ListingSelectors = field(default_factory=ListingSelectors)
    config_path: Optional[Path] = None


def _raw(key: str, section: Dict[str, Any], name: str) -> Any:
    raw = os.getenv(key)
    if raw is None or str(raw).strip() == "":
        return section.get(name)
    return raw


def _int_setting(key: str, section: Dict[str, Any], name: str, default: int) -> int:
    raw = _raw(key, section, name)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = int(raw)
        if value > 0:
            return value
    except (TypeError, ValueError):
        pass
    logger.warning("Invalid int value for %s=%s; using default %s", key, raw, default)
    return default


def _float_setting(key: str, section: Dict[str, Any], name: str, default: float) -> float:
    raw = _raw(key, section, name)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = float(raw)
        if value > 0:
            return value
    except (TypeError, ValueError):
        pass
    logger.warning("Invalid number for %s=%s; using default %s", key, raw, default)
    return default


def _str_setting(key: str, section: Dict[str, Any], name: str, default: str) -> str:
    raw = _raw(key, section, name)
    if raw is None or str(raw).strip() == "":
        return default
    return str(raw).strip()


def load_settings() -> HarvestSettings:
    config_env = os.getenv("HARVEST_CONFIG_PATH")
    config_path = Path(config_env) if config_env else None
    config = load_harvest_config(config_path)
    section = config.get("harvest") or {}
    if not isinstance(section, dict):
        logger.warning("'harvest' section of %s is not a mapping; ignoring it", config_path)
        section = {}

    return HarvestSettings(
        base_url=_str_setting("HARVEST_BASE_URL", section, "base_url", DEFAULT_BASE_URL),
        site_origin=_str_setting("HARVEST_SITE_ORIGIN", section, "site_origin", DEFAULT_SITE_ORIGIN),
        page_url_template=_str_setting(
            "HARVEST_PAGE_URL_TEMPLATE", section, "page_url_template", DEFAULT_PAGE_URL_TEMPLATE
        ),
        first_page=_int_setting("HARVEST_FIRST_PAGE", section, "first_page", 1),
        last_page=_int_setting("HARVEST_LAST_PAGE", section, "last_page", 50),
        max_concurrent=_int_setting("HARVEST_MAX_CONCURRENT", section, "max_concurrent", 50),
        fetch_timeout=_float_setting("HARVEST_FETCH_TIMEOUT", section, "fetch_timeout", 20.0),
        user_agent=_str_setting("HARVEST_USER_AGENT", section, "user_agent", DEFAULT_USER_AGENT),
        log_level=_str_setting("HARVEST_LOG_LEVEL", section, "log_level", "INFO").upper(),
        selectors=ListingSelectors.from_mapping(config.get("selectors")),
        config_path=config_path,
    )
