from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TimingMethod(str, Enum):
    """Kind of recorded time.

    The value doubles as the column name in
    :class:`~statistical_pb.models.history.SegmentHistory`.
    """

    REAL_TIME = "real_time"
    GAME_TIME = "game_time"


@dataclass(frozen=True)
class Time:
    """Elapsed time of one attempt, in seconds, per timing method.

    Either value may be ``None`` when the timer did not record it (e.g. no
    game time for games without a load remover).
    """

    real_time: Optional[float] = None
    game_time: Optional[float] = None

    def get(self, method: TimingMethod) -> Optional[float]:
        if TimingMethod(method) is TimingMethod.REAL_TIME:
            return self.real_time
        return self.game_time
