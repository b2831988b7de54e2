"""
Card code generation.

A card code is a 3-digit number (100-999) that lets a merchant find a
customer's open card without scanning. Codes are unique per business among
open cards; this module only draws candidates; the caller supplies the
reservation lookup and the enrollment transaction settles races.
"""

import logging
import random
from typing import Callable

from stampcard.exceptions import StampcardError

logger = logging.getLogger(__name__)

CODE_MIN = 100
CODE_MAX = 999
MAX_CODE_GENERATION_ATTEMPTS = 1000

CodeLookup = Callable[[str, object], bool]


def random_code(rng: random.Random | None = None) -> str:
    """Draw a uniformly random code in [CODE_MIN, CODE_MAX]."""
    return str((rng or random).randint(CODE_MIN, CODE_MAX))


def generate_unique_code(
    business_id,
    exists: CodeLookup,
    max_attempts: int = MAX_CODE_GENERATION_ATTEMPTS,
    rng: random.Random | None = None,
) -> str:
    """
    Return a code not currently reserved for the business.

    Args:
        business_id: Business namespace for the code
        exists: Lookup ``exists(code, business_id) -> bool``
        max_attempts: Draws before giving up
        rng: Random source (tests inject a seeded one)

    Raises:
        StampcardError: CODE_GENERATION_EXHAUSTED after max_attempts draws
    """
    for _ in range(max_attempts):
        code = random_code(rng)
        if not exists(code, business_id):
            return code

    logger.error(
        "Code generation exhausted for business %s after %d attempts",
        business_id,
        max_attempts,
    )
    raise StampcardError(
        "CODE_GENERATION_EXHAUSTED",
        business_id=business_id,
        attempts=max_attempts,
    )
