def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()

def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()

def strip_or_default(value: str | None, default: str) -> str:
    """
    Strips surrounding whitespace; blank or missing values become `default`.
    """
    if value is None:
        return default
    value = value.strip()
    return value or default
