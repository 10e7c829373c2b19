"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
Capabilities: extra validation rules, form observer hooks.
"""

import pluggy

from regform.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("regform")

__all__ = ["PluginManager", "hookimpl"]
