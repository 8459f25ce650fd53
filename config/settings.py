# ═══════════════════════════════════════════════════════════════════════════════
# Portfolio Decarbonisation Engine — Runtime Settings
# © 2026 Aparajita Parihar. All rights reserved.
#
# Single responsibility: resolve caller-tunable defaults (discount rate, SBTi
# tolerance, log level) from the environment and an optional .env file.
#
# Rules:
#   • _get_setting() is the sole environment access point for the engine.
#   • load_settings() never raises; malformed values fall back to the
#     canonical constants with a logged warning.
#   • Nothing here runs on import except reading .env into os.environ.
# ═══════════════════════════════════════════════════════════════════════════════

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from config.constants import DEFAULT_DISCOUNT_RATE, SBTI_TOLERANCE

logger = logging.getLogger(__name__)

# Load .env from project root (parent directory of config/)
_env_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env")
load_dotenv(_env_path)

DISCOUNT_RATE_ENV = "DECARB_DISCOUNT_RATE"
SBTI_TOLERANCE_ENV = "DECARB_SBTI_TOLERANCE"
LOG_LEVEL_ENV = "DECARB_LOG_LEVEL"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    discount_rate: float = DEFAULT_DISCOUNT_RATE
    sbti_tolerance: float = SBTI_TOLERANCE
    log_level: str = "WARNING"


def _get_setting(key: str, default: str = "") -> str:
    """Read a setting from the environment, stripped. Never raises."""
    return os.getenv(key, default).strip()


def _float_setting(key: str, default: float, *, lower: float, upper: float) -> float:
    raw = _get_setting(key)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number, using %s", key, raw, default)
        return default
    if not lower <= value <= upper:
        logger.warning("Ignoring %s=%s: outside [%s, %s], using %s", key, value, lower, upper, default)
        return default
    return value


def load_settings() -> Settings:
    """Build a Settings record from the environment.

    Priority: environment variable  →  config.constants default
    """
    level = _get_setting(LOG_LEVEL_ENV, "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring %s=%r: unknown log level, using WARNING", LOG_LEVEL_ENV, level)
        level = "WARNING"
    return Settings(
        discount_rate=_float_setting(DISCOUNT_RATE_ENV, DEFAULT_DISCOUNT_RATE, lower=0.0, upper=1.0),
        sbti_tolerance=_float_setting(SBTI_TOLERANCE_ENV, SBTI_TOLERANCE, lower=0.0, upper=1.0),
        log_level=level,
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Attach a stream handler to the root logger at the configured level.

    Intended for command-line callers and notebooks; the engine itself only
    emits records and never configures handlers on import.
    """
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level, format=_LOG_FORMAT)
