"""Plugin discovery, rule collection, and form attachment.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: A plugin that fails to provide rules is skipped with a warning.
Observer hooks run inside the form's channels, so their exceptions reach
the caller of ``set_field`` like any other subscriber's.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from regform.domain.fields import FieldName, coerce_field
from regform.errors import UnknownFieldError
from regform.plugins.hookspecs import RegformHookSpec

if TYPE_CHECKING:
    from regform.domain.rules import Rule
    from regform.form.channel import Subscription
    from regform.form.model import FormModel

PROJECT_NAME = "regform"
ENTRY_POINT_GROUP = "regform.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(RegformHookSpec)
        self._loaded: bool = False
        self._rule_warnings: list[str] = []

    def discover_and_load(self) -> list[str]:
        """Load plugins from the ``regform.plugins`` entry-point group.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def collect_rules(self) -> dict[FieldName, list[Rule]]:
        """Gather extra rules from every plugin implementing ``register_rules``.

        Plugins are visited in registration order so rules from earlier
        plugins run first.  Every skipped registration is logged and kept in
        :attr:`rule_warnings` until the next call.
        """
        self._rule_warnings = []
        collected: dict[FieldName, list[Rule]] = {}
        for plugin_name, plugin in self._pm.list_name_plugin():
            if plugin is None:
                continue
            for field, rules in self._plugin_rules(plugin, plugin_name).items():
                collected.setdefault(field, []).extend(rules)
        return collected

    @property
    def rule_warnings(self) -> list[str]:
        """Problems found by the last :meth:`collect_rules` call."""
        return list(self._rule_warnings)

    def _warn(self, message: str, *args: object, exc_info: bool = False) -> None:
        logger.warning(message, *args, exc_info=exc_info)
        self._rule_warnings.append(message % args)

    def _plugin_rules(self, plugin: object, plugin_name: str) -> dict[FieldName, list[Rule]]:
        hook = getattr(plugin, "register_rules", None)
        if hook is None:
            return {}

        try:
            rule_map = hook()
        except Exception as exc:
            self._warn(
                "Failed to collect rules from plugin %s: %s",
                plugin_name,
                exc,
                exc_info=True,
            )
            return {}

        if rule_map is None:
            return {}
        if not isinstance(rule_map, dict):
            self._warn("Plugin %s returned non-dict rule registrations", plugin_name)
            return {}

        result: dict[FieldName, list[Rule]] = {}
        for field_name, rules in rule_map.items():
            try:
                field = coerce_field(field_name)
            except UnknownFieldError:
                self._warn(
                    "Skipping rules for unknown field %r from plugin %s",
                    field_name,
                    plugin_name,
                )
                continue
            if not isinstance(rules, (list, tuple)):
                self._warn(
                    "Skipping rules for %s from plugin %s: expected a list",
                    field,
                    plugin_name,
                )
                continue
            valid = [rule for rule in rules if callable(rule)]
            if len(valid) != len(rules):
                self._warn(
                    "Skipping non-callable rules for %s from plugin %s",
                    field,
                    plugin_name,
                )
            result[field] = valid
        return result

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def attach(self, form: FormModel) -> list[Subscription]:
        """Forward *form*'s notifications to the observer hooks.

        Returns the subscriptions so the caller can detach again.
        """

        def on_value(field: FieldName) -> None:
            self._pm.hook.form_value_changed(form=form, field=field)

        def on_errors(field: FieldName) -> None:
            self._pm.hook.form_errors_changed(form=form, field=field)

        return [form.on_value_changed(on_value), form.on_errors_changed(on_errors)]

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
