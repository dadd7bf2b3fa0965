from shortlinks.registry.key_assignment import assign_key
from shortlinks.registry.link_registry import LinkRegistry


__all__ = [
    'assign_key',
    'LinkRegistry',
]
