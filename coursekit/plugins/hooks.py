"""Hook name constants for the plugin system.

Registry, routers and tests reference these constants instead of
repeating method names.
"""

from __future__ import annotations

# Preset hooks
HOOK_PROVIDE_PRESETS: str = "provide_presets"

# Observation hooks
HOOK_SAMPLES_GENERATED: str = "on_samples_generated"
HOOK_EVALUATION_COMPLETE: str = "on_evaluation_complete"

# Lifecycle hooks
HOOK_ACTIVATE: str = "on_activate"
HOOK_DEACTIVATE: str = "on_deactivate"

ALL_HOOKS: list[str] = [
    HOOK_ACTIVATE,
    HOOK_PROVIDE_PRESETS,
    HOOK_SAMPLES_GENERATED,
    HOOK_EVALUATION_COMPLETE,
    HOOK_DEACTIVATE,
]
