import logging
from datetime import datetime
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def remaining_ms(expires_at: datetime, now: datetime) -> int:
    """ 만료까지 남은 시간(ms). 이미 지났으면 0 """
    return max(0, int((expires_at - now).total_seconds() * 1000))


def format_time_left(ms: int) -> str:
    minutes = ms // 60000
    seconds = (ms % 60000) // 1000
    return f"{minutes}:{seconds:02d}"


class SessionCountdown:
    """
    QR 세션 카운트다운.
    tick()마다 벽시계 기준으로 남은 시간을 다시 계산하고,
    0에 도달했을 때 세션이 아직 활성 상태면 on_expire를 한 번만 호출한다.
    """

    def __init__(self, expires_at: datetime, on_expire: Callable[[], None],
                 clock: Callable[[], datetime] = datetime.utcnow, is_active: bool = True):
        self.expires_at = expires_at
        self.on_expire = on_expire
        self.clock = clock
        self.is_active = is_active
        self.remaining_ms: Optional[int] = None
        self.stopped = False

    def tick(self) -> int:
        if self.stopped:
            return self.remaining_ms or 0

        remaining = remaining_ms(self.expires_at, self.clock())
        # 시계가 뒤로 가도 표시 시간은 늘어나지 않는다
        if self.remaining_ms is not None:
            remaining = min(remaining, self.remaining_ms)
        self.remaining_ms = remaining

        if remaining == 0 and self.is_active:
            self.is_active = False
            logger.info("QR session countdown reached zero, ending session")
            self.on_expire()
        return remaining

    def deactivate(self) -> None:
        """ 세션이 다른 경로(교사의 종료 요청 등)로 이미 끝났을 때 """
        self.is_active = False

    def stop(self) -> None:
        self.stopped = True

    @property
    def time_left(self) -> str:
        return format_time_left(self.remaining_ms or 0)
