"""
Rule discovery for the category packages under tsx_guard/rules/.

Every public module of a category package is imported and its concrete
BaseRule subclasses are registered by rule ID, so adding a rule means
adding a module. Modules whose name starts with an underscore hold
shared helpers and are skipped.
"""

import importlib
import inspect
import logging
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BaseRule

logger = logging.getLogger(__name__)

RuleClasses = dict[str, type["BaseRule"]]


class RuleDiscovery:
    """Finds rule classes in ``<rules_base_path>/<category>/*.py``."""

    RULE_CATEGORIES = ["formatting", "simplification", "imports", "styling", "components"]

    def __init__(self, rules_base_path: Path | None = None):
        self.rules_base_path = rules_base_path or Path(__file__).parent
        self._rules: RuleClasses = {}
        self._errors: list[str] = []

    def discover_all(self) -> RuleClasses:
        """Scan every category and return rule classes keyed by rule ID."""
        self._rules.clear()
        self._errors.clear()

        for category in self.RULE_CATEGORIES:
            self.discover_category(category)

        if self._errors:
            logger.warning(f"Rule discovery finished with {len(self._errors)} errors")
        return self._rules

    def discover_category(self, category: str) -> RuleClasses:
        found: RuleClasses = {}
        package_dir = self.rules_base_path / category
        if not package_dir.is_dir():
            logger.debug(f"No rule package at {package_dir}")
            return found

        for module_file in sorted(package_dir.glob("*.py")):
            if module_file.name.startswith("_"):
                continue

            module_name = f"{__package__}.{category}.{module_file.stem}"
            try:
                module = importlib.import_module(module_name)
            except Exception as e:
                message = f"Cannot import rule module {module_name}: {e}"
                logger.warning(message)
                self._errors.append(message)
                continue

            found.update(self._rule_classes(module))

        self._rules.update(found)
        return found

    def _rule_classes(self, module: ModuleType) -> RuleClasses:
        """Concrete rules defined in ``module`` itself, not imported into it."""
        from .base import BaseRule

        rules: RuleClasses = {}
        for name, obj in inspect.getmembers(module, inspect.isclass):
            if (
                not issubclass(obj, BaseRule)
                or obj.__module__ != module.__name__
                or inspect.isabstract(obj)
            ):
                continue
            try:
                rule_id = obj().rule_id
            except Exception as e:
                logger.warning(f"Skipping {module.__name__}.{name}: {e}")
                continue
            rules[rule_id] = obj
            logger.debug(f"Discovered rule {rule_id} in {module.__name__}")
        return rules

    @property
    def discovery_errors(self) -> list[str]:
        return self._errors.copy()

    def get_rule_class(self, rule_id: str) -> type["BaseRule"] | None:
        return self._rules.get(rule_id)
