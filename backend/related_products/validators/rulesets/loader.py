"""Rule-set loader — reads named rule sets from JSON files.

Files in this directory are always loaded; RULE_SETS_DIR can point at an extra
directory whose files override same-named built-ins. Each file holds one
ValidationRuleSet; its "name" defaults to the file stem.
"""

import json
from pathlib import Path
from typing import Optional

import structlog
from pydantic import ValidationError

from related_products.config import get_settings
from related_products.validators.models import ValidationRuleSet

logger = structlog.get_logger()

RULES_DIR = Path(__file__).parent

# Cache loaded rule sets to avoid re-reading from disk
_rule_set_cache: dict[str, ValidationRuleSet] = {}


def _rule_set_dirs() -> list[Path]:
    dirs = [RULES_DIR]
    extra = get_settings().RULE_SETS_DIR
    if extra:
        dirs.append(Path(extra))
    return dirs


def _load_all_rule_sets() -> dict[str, ValidationRuleSet]:
    """Load and cache all JSON rule-set files."""
    if _rule_set_cache:
        return _rule_set_cache

    for directory in _rule_set_dirs():
        for json_file in sorted(directory.glob("*.json")):
            try:
                data = json.loads(json_file.read_text(encoding="utf-8"))
                data.setdefault("name", json_file.stem)
                rule_set = ValidationRuleSet.model_validate(data)
            except (json.JSONDecodeError, AttributeError, ValidationError) as e:
                logger.warning("rule_set_skipped", path=str(json_file), error=str(e))
                continue
            _rule_set_cache[rule_set.name] = rule_set

    logger.debug("rule_sets_loaded", names=sorted(_rule_set_cache))
    return _rule_set_cache


def load_rule_set(name: str) -> Optional[ValidationRuleSet]:
    """Load a rule set by name.

    Args:
        name: Rule-set identifier (e.g., "wallet")

    Returns:
        The rule set, or None if not found
    """
    return _load_all_rule_sets().get(name)


def get_all_rule_sets() -> list[str]:
    """List all available rule-set names."""
    return sorted(_load_all_rule_sets().keys())


def default_rule_set() -> ValidationRuleSet:
    """Return the rule set named by the DEFAULT_RULE_SET setting.

    Raises:
        LookupError: If no rule set with that name exists
    """
    name = get_settings().DEFAULT_RULE_SET
    rule_set = load_rule_set(name)
    if rule_set is None:
        raise LookupError(f"Default rule set '{name}' not found")
    return rule_set


def clear_cache() -> None:
    _rule_set_cache.clear()
