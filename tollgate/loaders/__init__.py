from .rules_loader import RulesLoader, get_rules_loader

__all__ = ["RulesLoader", "get_rules_loader"]
