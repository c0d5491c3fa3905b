"""
Configuration entry point for the Dataroid request logger.
Exposes config.json values as module-level settings.
"""

from typing import Dict, Any, Set
from config_loader import get_config

# Load configuration on module import
try:
    config = get_config()
    LOGGING_CONFIG: Dict[str, Any] = config.get_logging_config()
    DISABLED_PROVIDERS: Set[str] = set(config.get_disabled_providers())
except Exception as e:
    print(f"Warning: Could not load centralized config: {e}")
    # Fallback to defaults
    LOGGING_CONFIG = {'debugMode': False, 'structured': True}
    DISABLED_PROVIDERS = set()

# Convenience functions
def is_debug_mode() -> bool:
    """Check if debug mode is enabled."""
    return LOGGING_CONFIG.get('debugMode', False)

def is_structured_output() -> bool:
    """Check if decoded requests are printed as structured JSON lines."""
    return LOGGING_CONFIG.get('structured', True)

def provider_enabled(provider_key: str) -> bool:
    """Check if a provider is enabled in the configuration."""
    return provider_key not in DISABLED_PROVIDERS
