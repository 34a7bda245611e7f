"""
Per-day action locks.

A lock key is (quote_id, device_id, day). Once a key is locked the device has
used its one submit-or-skip action for that quote on that day. Keys carry the
day, so yesterday's locks never block today; they are only dropped when
purge_before() is called.
"""

import threading
from datetime import date
from typing import NamedTuple, Set

from utils.date_utils import format_day_key
from utils.logging_manager import store_logger


class LockKey(NamedTuple):
    """当日锁键"""
    quote_id: str
    device_id: str
    day: date

    def __str__(self) -> str:
        return f"{self.quote_id}:{self.device_id}:{format_day_key(self.day)}"


class LockRegistry:
    """当日提交/跳过锁集合（线程安全）"""

    def __init__(self):
        self._locks: Set[LockKey] = set()
        self._mutex = threading.Lock()

    @staticmethod
    def key(quote_id: str, device_id: str, day: date) -> LockKey:
        """构造锁键"""
        return LockKey(quote_id, device_id, day)

    def is_locked(self, key: LockKey) -> bool:
        """检查是否已锁定"""
        with self._mutex:
            return key in self._locks

    def lock(self, key: LockKey) -> None:
        """锁定，重复锁定不报错"""
        with self._mutex:
            self._locks.add(key)

    def acquire(self, key: LockKey) -> bool:
        """原子地检查并锁定，已锁定返回 False"""
        with self._mutex:
            if key in self._locks:
                return False
            self._locks.add(key)
            return True

    def purge_before(self, day: date) -> int:
        """清除早于指定日期的锁，返回清除数量"""
        with self._mutex:
            stale = {key for key in self._locks if key.day < day}
            self._locks -= stale
        if stale:
            store_logger.info(f"[LockRegistry] Purged {len(stale)} stale locks before {format_day_key(day)}")
        return len(stale)

    def __len__(self) -> int:
        with self._mutex:
            return len(self._locks)

    def __contains__(self, key: LockKey) -> bool:
        return self.is_locked(key)
