from __future__ import annotations

import random
import string

ID_LENGTH = 8
ID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


def generate_task_id(rng: random.Random | None = None) -> str:
    """Return a random 8-character alphanumeric id.

    Uniqueness is not checked here; the store retries on collision.
    """
    choices = rng.choices if rng is not None else random.choices
    return "".join(choices(ID_ALPHABET, k=ID_LENGTH))


__all__ = ["ID_ALPHABET", "ID_LENGTH", "generate_task_id"]
