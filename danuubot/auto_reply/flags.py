"""Runtime feature flags toggled by chat commands."""

from dataclasses import dataclass

from loguru import logger

from danuubot.config.schema import FeaturesConfig


@dataclass
class FeatureFlags:
    """
    Session state for the toggleable automations.

    Lives for the process lifetime only; restarts fall back to the
    configured defaults.
    """
    auto_status_view: bool = True
    anti_delete: bool = True

    @classmethod
    def from_config(cls, config: FeaturesConfig) -> "FeatureFlags":
        return cls(
            auto_status_view=config.auto_status_view,
            anti_delete=config.anti_delete,
        )

    def is_auto_status_view_enabled(self) -> bool:
        return self.auto_status_view

    def set_auto_status_view(self, enabled: bool) -> None:
        self.auto_status_view = enabled
        logger.info(f"Auto status view {'enabled' if enabled else 'disabled'}")

    def is_anti_delete_enabled(self) -> bool:
        return self.anti_delete

    def set_anti_delete(self, enabled: bool) -> None:
        self.anti_delete = enabled
        logger.info(f"Anti-delete {'enabled' if enabled else 'disabled'}")
