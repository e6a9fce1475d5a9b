# services/config.py
"""
Service for configuration management operations.
"""

from typing import Any, List, Tuple

from .base import BaseService, ServiceResult


class ConfigService(BaseService):
    """
    Service for configuration management operations.

    Provides ServiceResult-wrapped methods for configuration access.
    """

    def get_config(self) -> ServiceResult[Any]:
        """
        Get the current configuration.

        Returns:
            ServiceResult containing the Config object on success
        """
        try:
            from ghasset.core.config import get_config as core_get_config

            config = core_get_config()

            return ServiceResult.ok(data=config, message="Loaded configuration")
        except Exception as e:
            return ServiceResult.fail(f"Failed to get config: {e}")

    def get_default_config(self) -> ServiceResult[Any]:
        """
        Get the default configuration.

        Returns:
            ServiceResult containing the default Config object
        """
        try:
            from ghasset.core.config import get_default_config as core_get_default

            config = core_get_default()

            return ServiceResult.ok(data=config, message="Loaded default config")
        except Exception as e:
            return ServiceResult.fail(f"Failed to get default config: {e}")

    def describe_sources(self) -> ServiceResult[List[Tuple[str, str, Any, str]]]:
        """
        List every setting with its value and origin.

        Returns:
            ServiceResult containing (section, key, value, source) tuples
        """
        result = self.get_config()
        if not result.success:
            return result

        config = result.data
        rows = []
        for section, values in config.to_dict().items():
            for key, value in values.items():
                rows.append((section, key, value, config.source_of(section, key)))

        return ServiceResult.ok(data=rows, message=f"Found {len(rows)} settings")
