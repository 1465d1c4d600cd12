"""Champion id normalization.

Champion ids are the lowercase alphanumerics of the display name, so
"K'Sante", "ksante" and "KSante" all resolve to ``ksante``.
"""

import re
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_champion_id(value: Optional[str]) -> str:
    """Convert a champion name or id into its stable id ('' for empty input)."""
    if not value:
        return ""
    return _NON_ALNUM.sub("", value.lower())
