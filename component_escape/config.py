"""
Centralized configuration for component escaping.

Values are read from the environment, optionally seeded from a ``.env`` file
in the current working directory.
"""
import os
import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

_config_logger = logging.getLogger('config')

_env_file = Path.cwd() / '.env'
if _env_file.exists():
    load_dotenv(_env_file)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


DEBUG_MODE = _env_flag('DEBUG_MODE', 'false')
if DEBUG_MODE:
    logging.basicConfig(level=logging.DEBUG, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    _config_logger.setLevel(logging.DEBUG)
    _config_logger.debug(f"DEBUG_MODE enabled, .env loaded from: {_env_file if _env_file.exists() else '(none)'}")

# Collapse single-child component chains before stringifying
FLATTEN_COMPONENTS = _env_flag('FLATTEN_COMPONENTS', 'true')

# Return the untranslated source tree when a translated string is malformed
FALLBACK_TO_SOURCE = _env_flag('FALLBACK_TO_SOURCE', 'true')

# ============================================================================
# COMPONENT TAG GRAMMAR
# ============================================================================
# Fixed wire format shown to translators. Not configurable: translated
# strings must be parseable by any version of this package.

COMPONENT_TAG_NAME = "c"
"""Tag name used in placeholders (e.g., c in <c0>)"""

ROOT_COMPONENT_INDEX = -1
"""Index reserved for the unrendered root component"""

MAX_RESTORED_DEPTH = 200
"""Deepest external tree a translated string may rebuild (nesting levels)"""


@dataclass
class EscapeConfig:
    """Options controlling the escape pipeline"""

    flatten: bool = FLATTEN_COMPONENTS
    fallback_to_source: bool = FALLBACK_TO_SOURCE

    @classmethod
    def from_env(cls) -> 'EscapeConfig':
        """Create config from the current environment variables"""
        return cls(
            flatten=_env_flag('FLATTEN_COMPONENTS', 'true'),
            fallback_to_source=_env_flag('FALLBACK_TO_SOURCE', 'true'),
        )

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'EscapeConfig':
        """Create config from a plain dictionary, e.g. a plugin settings block"""
        data = data or {}
        return cls(
            flatten=bool(data.get('flatten', FLATTEN_COMPONENTS)),
            fallback_to_source=bool(data.get('fallback_to_source', FALLBACK_TO_SOURCE)),
        )
