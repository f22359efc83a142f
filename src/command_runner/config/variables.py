"""Read-only key/value configuration views.

A view maps a string key to an optional string value. Views compose:
``with_prefix`` scopes a view to a key prefix and ``ConfigVariablesBuilder``
stacks several views so that later layers override earlier ones.

Keys use ``:`` as the section separator, e.g. ``Commands:deploy:env``.
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

KEY_DELIMITER = ":"
ENV_KEY_DELIMITER = "__"


class ConfigVariables(ABC):
    """Abstract read-only configuration view."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value for ``key``, or None if it is not set."""
        pass

    def with_prefix(self, prefix: str) -> "ConfigVariables":
        """Create a view that looks up ``prefix + key`` in this view."""
        return PrefixedConfigVariables(self, prefix)

    def __getitem__(self, key: str) -> str | None:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None


class DictConfigVariables(ConfigVariables):
    """View over an in-memory mapping of flat keys."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values = {
            key: _to_str(value)
            for key, value in (values or {}).items()
            if value is not None
        }

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(keys={sorted(self._values)!r})"


class EnvironmentConfigVariables(ConfigVariables):
    """View over environment variables.

    Key ``Commands:deploy:env`` is read from ``<prefix>Commands__deploy__env``.
    """

    def __init__(
        self,
        prefix: str = "",
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.prefix = prefix
        self._environ = os.environ if environ is None else environ

    def get(self, key: str) -> str | None:
        env_key = self.prefix + key.replace(KEY_DELIMITER, ENV_KEY_DELIMITER)
        return self._environ.get(env_key)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(prefix={self.prefix!r})"


class PrefixedConfigVariables(ConfigVariables):
    """View that prepends a fixed prefix to every key before lookup."""

    def __init__(self, source: ConfigVariables, prefix: str) -> None:
        self.source = source
        self.prefix = prefix

    def get(self, key: str) -> str | None:
        return self.source.get(self.prefix + key)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(prefix={self.prefix!r})"


class LayeredConfigVariables(ConfigVariables):
    """Ordered stack of views; the first layer holding a key wins.

    Layers are given highest precedence first. Use
    ``ConfigVariablesBuilder`` to stack layers lowest precedence first.
    """

    def __init__(self, layers: Iterable[ConfigVariables]) -> None:
        self.layers: tuple[ConfigVariables, ...] = tuple(layers)

    def get(self, key: str) -> str | None:
        for layer in self.layers:
            value = layer.get(key)
            if value is not None:
                return value
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(layers={list(self.layers)!r})"


class ConfigVariablesBuilder:
    """Compose views so that each added layer overrides the ones before it.

    Usage:
        view = (
            ConfigVariablesBuilder()
            .add(global_vars)
            .add(global_vars.with_prefix("Commands:deploy:"))
            .build()
        )
    """

    def __init__(self) -> None:
        self._layers: list[ConfigVariables] = []

    def add(self, layer: ConfigVariables) -> "ConfigVariablesBuilder":
        """Add a layer with higher precedence than every layer added so far."""
        self._layers.append(layer)
        return self

    def add_mapping(self, values: Mapping[str, Any]) -> "ConfigVariablesBuilder":
        """Add an in-memory mapping layer."""
        return self.add(DictConfigVariables(values))

    def build(self) -> LayeredConfigVariables:
        return LayeredConfigVariables(reversed(self._layers))


def flatten_mapping(
    data: Mapping[str, Any],
    parent: str = "",
) -> dict[str, str]:
    """Flatten nested tables into ``a:b:c`` keys.

    List items are keyed by their index. ``None`` values are skipped.

    Args:
        data: Nested mapping, e.g. parsed TOML.
        parent: Key prefix for the current level.

    Returns:
        Flat mapping of string keys to string values.
    """
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{parent}{KEY_DELIMITER}{key}" if parent else str(key)
        flat.update(_flatten_value(full_key, value))
    return flat


def _flatten_value(key: str, value: Any) -> dict[str, str]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return flatten_mapping(value, key)
    if isinstance(value, (list, tuple)):
        return flatten_mapping({str(i): item for i, item in enumerate(value)}, key)
    return {key: _to_str(value)}


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
