"""
Date and time utilities for the quiz system.
Derives the calendar-day key that gates one action per device per day.
"""

from datetime import datetime, date, timedelta
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ConfigurationError, ErrorCodes


def ensure_date(dt: Union[date, datetime]) -> date:
    """确保日期为 date 类型"""
    if dt is None:
        return None
    return dt.date() if isinstance(dt, datetime) else dt


def format_day_key(day: Union[date, datetime]) -> str:
    """格式化为 YYYY-MM-DD 日期键"""
    return ensure_date(day).isoformat()


def parse_day_key(value: str) -> date:
    """解析 YYYY-MM-DD 日期键"""
    return datetime.strptime(value, "%Y-%m-%d").date()


class DayClock:
    """按固定时区计算“今天”

    timezone 为 None 时使用服务器本地时区。一次操作内只取一次日期，
    保证同一请求内不会跨时区或跨日。
    """

    def __init__(self, timezone: Optional[str] = None):
        self.timezone_name = timezone
        try:
            self._tz = ZoneInfo(timezone) if timezone else None
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(
                f"Unknown timezone: {timezone}",
                ErrorCodes.CONFIG_INVALID_FORMAT
            ) from e

    def now(self) -> datetime:
        """获取当前时间"""
        if self._tz is None:
            return datetime.now().astimezone()
        return datetime.now(self._tz)

    def today(self) -> date:
        """获取当前日历日"""
        return self.now().date()

    def day_key(self) -> str:
        """获取当前日期键"""
        return format_day_key(self.today())


class FixedDayClock(DayClock):
    """固定日期的时钟，用于测试和模拟跨日"""

    def __init__(self, day: Union[date, str]):
        super().__init__(None)
        self._day = parse_day_key(day) if isinstance(day, str) else day

    def now(self) -> datetime:
        return datetime.combine(self._day, datetime.min.time())

    def today(self) -> date:
        return self._day

    def set_day(self, day: Union[date, str]) -> None:
        """设置当前日期"""
        self._day = parse_day_key(day) if isinstance(day, str) else day

    def advance(self, days: int = 1) -> date:
        """向后推进若干天"""
        self._day = self._day + timedelta(days=days)
        return self._day
