import copy
from typing import Any, Mapping

GLOBAL_ADDRESS_TYPES = ("from", "reply_to", "to")


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """
    Recursively merge ``override`` onto ``base`` and return a new dict.

    For every key in ``override``:
      - both values are mappings -> merged key-by-key (recursively),
      - otherwise -> the ``override`` value replaces the ``base`` value (lists included).

    Neither argument is mutated and the result shares no mutable values with them.

    Example:
        >>> deep_merge({"stream": {"ssl": {"verify_peer": False, "verify_peer_name": False}}},
        ...            {"stream": {"ssl": {"verify_peer": True}}})
        {'stream': {'ssl': {'verify_peer': True, 'verify_peer_name': False}}}
    """
    merged: dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def set_global_address(mailer: Any, config: Mapping[str, Any], address_type: str) -> bool:
    """
    Register ``config[address_type]`` as a global address on ``mailer``.

    Only mappings carrying an ``address`` field are registered, through
    ``mailer.always_<address_type>(address, name)``. Anything else is ignored.
    Returns whether a registration happened.
    """
    address = config.get(address_type)
    if isinstance(address, Mapping) and address.get("address") is not None:
        getattr(mailer, f"always_{address_type}")(address["address"], address.get("name"))
        return True
    return False
