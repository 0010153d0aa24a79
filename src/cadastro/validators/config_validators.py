def to_uppercase(value: str | None) -> str | None:
    """
    Upper-case a settings value, leaving None untouched.
    """
    if value is None:
        return None
    return value.strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Lower-case a settings value, leaving None untouched.
    """
    if value is None:
        return None
    return value.strip().lower()
