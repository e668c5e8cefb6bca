"""
Answer key helpers.

A question's answer lives under its `name`. Auxiliary data lives under
derived keys built by suffixing the name:

    "question1"          -> selection
    "question1-Comment"  -> free text when "other" is selected
    "question1-Image"    -> attached images

Names are compared byte-for-byte. No case folding or trimming.
"""

from typing import Tuple

COMMENT_SUFFIX = "-Comment"
IMAGE_SUFFIX = "-Image"

# Value stored when the surveyor picks the "Other" item.
OTHER_VALUE = "other"


def comment_key(name: str) -> str:
    """Get comment key for a question (e.g., "question1" -> "question1-Comment")."""
    return f"{name}{COMMENT_SUFFIX}"


def image_key(name: str) -> str:
    """Get image key for a question (e.g., "question1" -> "question1-Image")."""
    return f"{name}{IMAGE_SUFFIX}"


def derived_keys(name: str) -> Tuple[str, str, str]:
    """Return every answer key a question may own: base, comment, image."""
    return name, comment_key(name), image_key(name)
