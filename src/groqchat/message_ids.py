"""Message id generation.

Stores assign every appended message a random lowercase hex id. Ids are
checked against every id the store has ever issued, so a deleted message's
id is never handed out again.
"""

import random
from typing import Set


MESSAGE_ID_MIN_DIGITS = 8
MESSAGE_ID_MAX_ATTEMPTS = 3


def generate_message_id(issued_ids: Set[str], min_digits: int = MESSAGE_ID_MIN_DIGITS) -> str:
    """Generate unique hex message id.

    Args:
        issued_ids: Set of ids already issued by the store (will be modified)
        min_digits: Minimum number of hex digits (default: MESSAGE_ID_MIN_DIGITS)

    Returns:
        Unique hex id string (e.g., "3fa91c07")

    The function tries to generate an id with min_digits length. If all
    attempts collide, it increases the digit count and tries again.
    """
    digits = min_digits

    while True:
        for _ in range(MESSAGE_ID_MAX_ATTEMPTS):
            message_id = format(random.randint(0, 16**digits - 1), f"0{digits}x")
            if message_id not in issued_ids:
                issued_ids.add(message_id)
                return message_id

        # All attempts failed, increase digits
        digits += 1


def resolve_message_id(prefix: str, known_ids: list[str]) -> str | None:
    """Resolve a unique id prefix typed by the user to a full message id.

    Returns None when nothing or more than one id matches.
    """
    prefix = prefix.strip().lower()
    if not prefix:
        return None
    if prefix in known_ids:
        return prefix
    matches = [message_id for message_id in known_ids if message_id.startswith(prefix)]
    if len(matches) == 1:
        return matches[0]
    return None
