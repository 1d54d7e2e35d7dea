"""Local asset reference detection for ``props.src`` values."""

from typing import Any

REMOTE_PREFIXES = ("http://", "https://", "//", "blob:")
INLINE_PREFIXES = ("data:",)


def is_local_reference(value: Any) -> bool:
    """
    True if ``value`` names a session-held asset rather than a remote URL or
    an inline-encoded payload.

    Examples:
        >>> is_local_reference("img_01J9Z3Q8V5")
        True
        >>> is_local_reference("https://example.com/a.png")
        False
        >>> is_local_reference("data:image/png;base64,iVBORw0")
        False
    """
    if not isinstance(value, str) or not value:
        return False
    lowered = value.lower()
    return not lowered.startswith(REMOTE_PREFIXES + INLINE_PREFIXES)
