"""Slug and code helpers."""
import re
import secrets
import string
from typing import List, Optional

CODE_ALPHABET = string.ascii_uppercase + string.digits
INVITATION_PREFIX = "INVITE-"


def slugify(value: str) -> str:
    """Lowercase, collapse non-alphanumerics to '-', trim leading/trailing '-'."""
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


def generate_code(prefix: str = "", length: int = 8) -> str:
    return prefix + "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def generate_invitation_code() -> str:
    return generate_code(INVITATION_PREFIX)


def split_lines(text: Optional[str]) -> Optional[List[str]]:
    """Split free text into trimmed non-empty lines; None or blank text gives None."""
    if not text:
        return None
    lines = [line.strip() for line in text.splitlines()]
    return [line for line in lines if line] or None
