"""Recency labels and date grouping for the gallery grid.

`now` is read from the wall clock on every call unless the caller passes
`now_ms`. Two calls a few milliseconds apart can therefore put a file that
sits on a day boundary into different buckets. That is accepted: the grid is
recomputed on the next render anyway.
"""

import time
from datetime import datetime
from typing import Iterable, Optional

from ..models.common import FileRecord
from ..models.gallery import DateGroup

MS_PER_DAY = 86_400_000


def classify(uploaded_at_ns: int, now_ms: Optional[int] = None) -> str:
    """Label a timestamp relative to now.

    0 days -> "Today", 1 -> "Yesterday", under a week -> weekday name,
    otherwise "<Month> <Year>". Names follow the process locale. Timestamps
    in the future land in the weekday branch.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    uploaded_ms = uploaded_at_ns // 1_000_000
    diff_days = (now_ms - uploaded_ms) // MS_PER_DAY

    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    date = datetime.fromtimestamp(uploaded_ms / 1000)
    if diff_days < 7:
        return date.strftime("%A")
    return date.strftime("%B %Y")


def group_by_date(files: Iterable[FileRecord], now_ms: Optional[int] = None) -> list[DateGroup]:
    """Bucket files by label in a single pass.

    Groups appear in the order their label is first seen and files keep their
    input order. Nothing is sorted; callers wanting chronological groups must
    sort the input first.
    """
    groups: dict[str, DateGroup] = {}
    for file in files:
        label = classify(file.uploaded_at, now_ms)
        group = groups.get(label)
        if group is None:
            group = groups[label] = DateGroup(label=label)
        group.files.append(file)
    return list(groups.values())
