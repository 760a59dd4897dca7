from typing import List, Optional


def parse_recipients(raw: Optional[str]) -> List[str]:
    """
    Split a semicolon-delimited recipient string into trimmed addresses.

    Blank segments are dropped. Duplicates are kept and addresses are not
    syntax-checked. Callers reject empty input before getting here; None
    parses to an empty list.
    """
    if not raw:
        return []
    return [segment.strip() for segment in raw.split(";") if segment.strip()]
