from __future__ import annotations

from notifix.errors import ProviderError


def coerce_count(value: object) -> int:
    """Coerce a provider result to a non-negative integer count.

    Args:
        value: Raw provider result. Integers and integer strings are accepted.

    Returns:
        The count.

    Raises:
        ProviderError: If the value is not an integer or is negative.
    """

    if isinstance(value, bool):
        raise ProviderError(f"Count must be an integer, got {value!r}")
    if isinstance(value, int):
        count = value
    elif isinstance(value, str):
        try:
            count = int(value.strip())
        except ValueError as exc:
            raise ProviderError(f"Count must be an integer, got {value!r}") from exc
    else:
        raise ProviderError(f"Count must be an integer, got {type(value).__name__}")
    if count < 0:
        raise ProviderError(f"Count must be non-negative, got {count}")
    return count
