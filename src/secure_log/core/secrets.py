"""
Secret set

Builds the mapping of secret names to values from the environment store.
The set is rebuilt on every call so long-running processes see changes.
"""

import os
from collections.abc import Mapping
from typing import Iterable, Optional


def collect_secrets(
    environ: Optional[Mapping[str, str]] = None,
    *,
    min_length: int = 1,
    ignore: Iterable[str] = (),
) -> dict[str, str]:
    """Read the current secret set from the environment.

    Empty values are always excluded: the empty string is contained in
    every string and would match every log call.

    Args:
        environ: Environment store, defaults to ``os.environ``.
        min_length: Minimum value length for a variable to count as a secret.
        ignore: Variable names that are never treated as secrets.

    Returns:
        Mapping of secret name to secret value.

    Example:
        >>> collect_secrets({"API_KEY": "sk-123", "EMPTY": ""})
        {'API_KEY': 'sk-123'}
    """
    source = os.environ if environ is None else environ
    ignored = set(ignore)
    threshold = max(min_length, 1)

    return {
        name: value
        for name, value in source.items()
        if name not in ignored and isinstance(value, str) and len(value) >= threshold
    }
