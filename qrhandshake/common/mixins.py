"""
Mixins for common functionality.
"""

from __future__ import annotations

from typing import Any


class Configurable:
    """
    Mixin class for handling configuration overrides.

    Classes using this mixin can use apply_overrides to set attributes from
    an override dict, falling back to the upper-case attribute of a config
    object.
    """

    def apply_overrides(
        self,
        overrides: dict[str, Any],
        config_obj: Any,
        attr_list: list[str] | None = None,
    ) -> None:
        """
        Apply overrides to the instance using the config object as defaults.

        Sets self.attr = overrides.get(attr, config_obj.ATTR) for each attr in
        attr_list. ``None`` overrides count as absent.

        Args:
            overrides: Dictionary of override values
            config_obj: Configuration object with uppercase attribute names
            attr_list: List of attribute names to set
        """
        if attr_list is None:
            attr_list = []

        unknown = set(overrides) - set(attr_list)
        if unknown:
            msg = f"Unknown settings: {', '.join(sorted(unknown))}"
            raise TypeError(msg)

        for attr in attr_list:
            value = overrides.get(attr)
            if value is None:
                value = getattr(config_obj, attr.upper(), None)
            setattr(self, attr, value)
