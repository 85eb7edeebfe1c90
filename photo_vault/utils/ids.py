"""Client-side file identifiers.

Ids are the upload time in epoch milliseconds plus a random token. Uniqueness
is probabilistic: collisions are negligible for one caller's session, and the
registry is keyed per caller, so nothing stronger is assumed.
"""

import time
import uuid
from typing import Callable

IdGenerator = Callable[[], str]


def timestamp_id() -> str:
    return f"{time.time_ns() // 1_000_000}_{uuid.uuid4().hex[:12]}"
