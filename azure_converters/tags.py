"""Conversion between SDK tag dictionaries and internal tags."""

from typing import Dict, Mapping, Optional


def map_to_tags(src: Optional[Mapping[str, Optional[str]]]) -> Dict[str, str]:
    """
    Convert SDK tags to internal tags.

    The Azure SDK allows tag values to be None; these become empty strings.
    """
    if not src:
        return {}
    return {key: value or "" for key, value in src.items()}

