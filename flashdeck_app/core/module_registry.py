"""Declarative list of the feature modules and the blueprints they mount.

A module may expose several blueprints (HTML pages and a JSON API, for
instance); each one is listed with its own URL prefix.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from flask import Blueprint, Flask
from werkzeug.utils import import_string


@dataclass(frozen=True)
class BlueprintMount:
    """One blueprint attribute of a module and where it is mounted."""

    attribute: str
    url_prefix: Optional[str] = None


@dataclass(frozen=True)
class ModuleDefinition:
    """A feature module package and the blueprints it contributes."""

    import_path: str
    mounts: Tuple[BlueprintMount, ...] = field(default_factory=tuple)
    version: str = "1.0"

    def load_blueprints(self) -> Iterable[Tuple[Blueprint, Optional[str]]]:
        """Import the module and yield ``(blueprint, url_prefix)`` pairs."""

        module = import_string(self.import_path)
        for mount in self.mounts:
            blueprint = getattr(module, mount.attribute, None)
            if not isinstance(blueprint, Blueprint):
                raise TypeError(
                    "Expected attribute '%s' in '%s' to be a Flask Blueprint, got %r instead"
                    % (mount.attribute, self.import_path, type(blueprint))
                )
            yield blueprint, mount.url_prefix


def register_modules(app: Flask, modules: Iterable[ModuleDefinition]) -> None:
    """Register every blueprint of every module with the Flask app."""

    for module in modules:
        for blueprint, url_prefix in module.load_blueprints():
            app.register_blueprint(blueprint, url_prefix=url_prefix)
            app.logger.debug(
                "Registered %s.%s (version %s) at prefix %s",
                module.import_path,
                blueprint.name,
                module.version,
                url_prefix or "<root>",
            )


DEFAULT_MODULES: Tuple[ModuleDefinition, ...] = (
    ModuleDefinition("flashdeck_app.modules.auth", (BlueprintMount("auth_bp", "/auth"),)),
    ModuleDefinition("flashdeck_app.modules.access_control", (BlueprintMount("access_control_bp"),)),
    ModuleDefinition(
        "flashdeck_app.modules.decks",
        (BlueprintMount("decks_bp"), BlueprintMount("decks_api_bp", "/api/decks")),
    ),
    ModuleDefinition(
        "flashdeck_app.modules.study",
        (BlueprintMount("study_bp"), BlueprintMount("study_api_bp", "/api/study")),
    ),
    ModuleDefinition("flashdeck_app.modules.ai_services", (BlueprintMount("ai_services_bp"),)),
)


def register_default_modules(app: Flask) -> None:
    """Register the built-in Flashdeck modules."""

    register_modules(app, DEFAULT_MODULES)
