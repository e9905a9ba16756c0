"""
Rate Governor: 클라이언트 × route class 단위 요청 수 제한.

- rolling window (limits.MovingWindowRateLimiter)
- 프로세스 로컬 memory:// 기본, storage_uri로 공유 저장소 교체 가능
- 근사 카운팅 허용 (global 통과 후 route에서 거절돼도 global은 차감됨)
"""

import math
import time
from dataclasses import dataclass

from limits import RateLimitItem, RateLimitItemPerSecond
from limits.storage import Storage, storage_from_string
from limits.strategies import MovingWindowRateLimiter

from src.core.config import RateLimitPolicy


@dataclass(frozen=True)
class RateDecision:
    """check() 결과."""
    allowed: bool
    limit: int
    remaining: int
    reset_after: int  # 초

    def headers(self) -> dict[str, str]:
        """표준 RateLimit-* 응답 헤더."""
        headers = {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_after),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.reset_after)
        return headers


class RateGovernor:
    """
    요청 수 제한기.

    Usage:
        governor = RateGovernor(RateLimitPolicy())
        decision = governor.check("203.0.113.7", "edit")
        if not decision.allowed:
            ...  # 429
    """

    def __init__(self, policy: RateLimitPolicy, storage: Storage | None = None):
        self.policy = policy
        self.storage = storage or storage_from_string(policy.storage_uri)
        self._limiter = MovingWindowRateLimiter(self.storage)
        self._items: dict[str, RateLimitItem] = {}

    def _item_for(self, route_class: str) -> RateLimitItem:
        if route_class not in self._items:
            self._items[route_class] = RateLimitItemPerSecond(
                self.policy.limit_for(route_class),
                self.policy.window_seconds,
            )
        return self._items[route_class]

    def check(self, client_id: str, route_class: str) -> RateDecision:
        """
        요청 1건 차감 시도.

        Args:
            client_id: 클라이언트 식별자 (IP 등)
            route_class: "global" | "edit" | "text"

        Returns:
            RateDecision (허용 여부 + 남은 quota)
        """
        item = self._item_for(route_class)
        allowed = self._limiter.hit(item, route_class, client_id)
        stats = self._limiter.get_window_stats(item, route_class, client_id)

        return RateDecision(
            allowed=allowed,
            limit=item.amount,
            remaining=max(0, stats.remaining),
            reset_after=max(0, math.ceil(stats.reset_time - time.time())),
        )

    def reset(self) -> None:
        """모든 카운터 초기화 (테스트/운영 수동 조치용)."""
        self.storage.reset()
