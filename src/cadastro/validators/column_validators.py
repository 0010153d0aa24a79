from typing import Iterable


def find_unknown_keys(allowed: Iterable[str], keys: Iterable[str]) -> list[str]:
    """
    Return the keys that are not part of `allowed`, in the order they were given.
    - allowed: the entity's column names
    - keys: incoming filter or payload keys
    """
    allowed = set(allowed)
    return [k for k in keys if k not in allowed]


def find_managed_keys(managed: Iterable[str], keys: Iterable[str]) -> list[str]:
    """
    Return the keys a caller may not write directly (identity and audit columns).
    """
    managed = set(managed)
    return [k for k in keys if k in managed]
