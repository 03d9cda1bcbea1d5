"""Named JSON rule sets shipped with the package."""

from related_products.validators.rulesets.loader import (
    clear_cache,
    default_rule_set,
    get_all_rule_sets,
    load_rule_set,
)

__all__ = ["clear_cache", "default_rule_set", "get_all_rule_sets", "load_rule_set"]
