"""
FastAPI Dependencies.

Provides the process-wide integration registry and API executor.
"""
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.infrastructure.registry import (  # noqa: E402
    InMemoryIntegrationRegistry,
    build_registry_from_settings,
)
from core.settings import get_app_settings  # noqa: E402
from execution_layer import APIExecutor, create_default_executor  # noqa: E402

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_registry = None
_executor = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_registry() -> InMemoryIntegrationRegistry:
    global _registry
    if _registry is None:
        _registry = build_registry_from_settings(get_app_settings().integrations)
        logger.info("Created InMemoryIntegrationRegistry from settings")
    return _registry


def get_executor() -> APIExecutor:
    global _executor
    if _executor is None:
        _executor = create_default_executor(
            registry=get_registry(),
            settings=get_app_settings().execution,
        )
        logger.info("Created APIExecutor instance")
    return _executor


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _registry, _executor

    _registry = None
    _executor = None

    logger.info("Dependencies reset")
