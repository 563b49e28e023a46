"""
Serialization of ownership labels into TXT record text.

Labels are written as ``"heritage=dns-records-sync,dns-records-sync/owner=default"``.
The heritage pair marks the TXT record as managed by this tool.
"""

from typing import Dict

HERITAGE = "dns-records-sync"
LABEL_PREFIX = f"{HERITAGE}/"


class InvalidHeritageError(ValueError):
    """Raised when TXT text does not carry this tool's heritage."""


def serialize_labels(labels: Dict[str, str], with_quotes: bool = True) -> str:
    """Encode labels as TXT record text, keys in sorted order."""
    pairs = [f"heritage={HERITAGE}"]
    for key in sorted(labels):
        pairs.append(f"{LABEL_PREFIX}{key}={labels[key]}")

    text = ",".join(pairs)
    if with_quotes:
        return f'"{text}"'
    return text


def parse_labels(text: str) -> Dict[str, str]:
    """
    Decode labels from TXT record text.

    Raises:
        InvalidHeritageError: If the text is not labelled by this tool
        ValueError: If a heritage-bearing text holds a malformed pair
    """
    text = text.strip().strip('"')
    labels = {}
    heritage_found = False

    for token in text.split(","):
        key, sep, value = token.partition("=")
        if not sep:
            if not heritage_found:
                raise InvalidHeritageError(f"TXT text is not managed: {text}")
            raise ValueError(f"Malformed label '{token}' in TXT text: {text}")

        if key == "heritage":
            if value != HERITAGE:
                raise InvalidHeritageError(f"Unknown heritage '{value}'")
            heritage_found = True
            continue

        if key.startswith(LABEL_PREFIX):
            labels[key[len(LABEL_PREFIX):]] = value

    if not heritage_found:
        raise InvalidHeritageError(f"TXT text is not managed: {text}")

    return labels
