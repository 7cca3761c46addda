"""
Reusable URL templates.

A ``UrlTemplate`` carries a path template, base parameters and a
configuration, and builds URLs from them with per-call parameters merged
on top.
"""

import re
from typing import Any

from .builder import build_url
from .config import PathCatConfig
from .flattener import flatten
from .settings import get_default_config
from .types import ParameterMap


_PLACEHOLDER = re.compile(r":(\w+)")


class UrlTemplate:
    """
    URL template with embedded base parameters and configuration.

    Example:
        >>> users = UrlTemplate("/api/:version/users/:id", base_params={"version": "v1"})
        >>> users.build(id=7, expand=True)
        '/api/v1/users/7?expand=True'
    """

    def __init__(
        self,
        template: str,
        base_params: dict[str, Any] | None = None,
        config: PathCatConfig | None = None,
    ):
        """
        Initialize the template.

        Args:
            template: Absolute or relative URL template with ``:name`` placeholders
            base_params: Parameters applied to every build
            config: Build configuration (process defaults when None)
        """
        self.template = template
        self.base_params = base_params or {}
        self.config = config

    def build(self, additional_params: Any = None, **params: Any) -> str:
        """
        Build a URL from base, additional and keyword parameters.

        ``additional_params`` may be a mapping or any structured object. Each
        source is flattened with the template configuration and merged in
        order (base, additional, keyword); later sources override earlier
        ones under any key casing.

        Returns:
            The assembled URL
        """
        config = self.config if self.config is not None else get_default_config()

        merged = ParameterMap()
        for source in (self.base_params, additional_params, params):
            if source is not None:
                merged.update(flatten(source, config))

        return build_url(self.template, merged or None, config)

    def placeholders(self) -> list[str]:
        """Return placeholder names in template order, each listed once."""
        return list(dict.fromkeys(_PLACEHOLDER.findall(self.template)))

    def copy(self) -> "UrlTemplate":
        """Create a copy of the template."""
        return UrlTemplate(
            template=self.template,
            base_params=self.base_params.copy(),
            config=self.config,
        )

    def with_params(self, **params: Any) -> "UrlTemplate":
        """Create a new template with additional base parameters."""
        new_template = self.copy()
        new_template.base_params.update(params)
        return new_template

    def with_config(self, **changes: Any) -> "UrlTemplate":
        """Create a new template whose configuration has ``changes`` applied."""
        new_template = self.copy()
        base = self.config if self.config is not None else get_default_config()
        new_template.config = base.replace(**changes)
        return new_template

    def __repr__(self) -> str:
        return f"UrlTemplate(template='{self.template}', params={len(self.base_params)})"


__all__ = ["UrlTemplate"]
