import re
from typing import Any, Optional

# C0 controls except \t and \n, plus DEL and the C1 block.
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")


def clean_text(value: Any, default: Optional[str] = None) -> Optional[str]:
    """Strip control characters and surrounding whitespace; blank input falls back to ``default``."""
    if value is None:
        return default
    cleaned = _CONTROL_CHARS.sub("", str(value)).strip()
    return cleaned if cleaned else default
