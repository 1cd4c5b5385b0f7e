def to_uppercase(value: str | None) -> str | None:
    """
    Strip and upper-case a raw environment value, passing None through.
    """
    if value is None:
        return None
    return str(value).strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Strip and lower-case a raw environment value, passing None through.
    """
    if value is None:
        return None
    return str(value).strip().lower()
