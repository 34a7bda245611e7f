"""
Quiz Manager for the daily quote quiz.
Owns the quote catalog, the submission store and the day locks, and enforces
the one-submit-or-skip-per-device-per-day rule.
"""

from __future__ import annotations
import functools
import threading
from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from utils.config_manager import QuizConfig
from utils.date_utils import DayClock, format_day_key
from utils.exceptions import (
    ClientInputError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    ErrorCodes,
)
from utils.logging_manager import LogContext, quiz_logger
from store import (
    LockKey,
    LockRegistry,
    Quote,
    QuoteCatalog,
    RankingItem,
    Submission,
    SubmissionStore,
    build_submission_input_model,
    format_validation_issues,
    generate_submission_id,
)


def _ranking_sort_key(submission: Submission) -> Tuple[int, str]:
    return submission.like_count, submission.id


def rank_submissions(submissions: Iterable[Submission]) -> List[RankingItem]:
    """点赞数降序，点赞数相同时按ID字符串降序"""
    ordered = sorted(submissions, key=_ranking_sort_key, reverse=True)
    return [RankingItem.from_submission(s) for s in ordered]


class QuizManager:
    """每日名言问答管理器"""

    def __init__(self, catalog: QuoteCatalog, clock: DayClock,
                 today_quote_id: str,
                 locks: Optional[LockRegistry] = None,
                 submissions: Optional[SubmissionStore] = None,
                 fill_min_length: int = 1,
                 fill_max_length: int = 24,
                 evict_stale_locks: bool = True):
        if today_quote_id not in catalog:
            raise ConfigurationError(
                f"Today's quote {today_quote_id} is not in the catalog",
                ErrorCodes.CONFIG_INVALID_FORMAT
            )

        self.catalog = catalog
        self.clock = clock
        self.today_quote_id = today_quote_id
        self.locks = locks if locks is not None else LockRegistry()
        self.submissions = submissions if submissions is not None else SubmissionStore()
        self.evict_stale_locks = evict_stale_locks
        self._input_model = build_submission_input_model(fill_min_length, fill_max_length)
        self._lock = threading.RLock()
        self._last_day: Optional[date] = None

    @classmethod
    def from_config(cls, quiz_config: QuizConfig, clock: Optional[DayClock] = None,
                    id_factory: Optional[Callable[[], str]] = None) -> "QuizManager":
        """根据配置构建管理器"""
        catalog = QuoteCatalog.from_config(quiz_config.quotes)
        if id_factory is None:
            id_factory = functools.partial(generate_submission_id, quiz_config.id_length)

        manager = cls(
            catalog=catalog,
            clock=clock or DayClock(quiz_config.timezone),
            today_quote_id=quiz_config.today_quote_id,
            submissions=SubmissionStore(id_factory=id_factory),
            fill_min_length=quiz_config.fill_min_length,
            fill_max_length=quiz_config.fill_max_length,
            evict_stale_locks=quiz_config.evict_stale_locks,
        )
        quiz_logger.info(
            f"[QuizManager] Initialized with {len(catalog)} quotes, today={quiz_config.today_quote_id}, "
            f"timezone={quiz_config.timezone or 'local'}"
        )
        return manager

    # ---- Reads ---------------------------------------------------------------

    def today(self, device_id: Optional[str]) -> Tuple[Quote, bool]:
        """获取今日名言及当前设备是否已锁定"""
        quote = self.catalog.get(self.today_quote_id)
        if not device_id:
            # 没有设备ID无法判断锁定状态
            return quote, False
        with self._lock:
            key = self._lock_key(quote.id, device_id)
            return quote, self.locks.is_locked(key)

    def ranking(self, quote_id: str) -> List[RankingItem]:
        """获取排行榜，未知名言返回空列表"""
        with self._lock:
            return rank_submissions(self.submissions.list_by_quote(quote_id))

    def stats(self) -> Dict[str, Any]:
        """获取运行状态统计"""
        return {
            'quotes': len(self.catalog),
            'submissions': len(self.submissions),
            'locks': len(self.locks),
            'day': self.clock.day_key(),
        }

    # ---- Day-gated actions ---------------------------------------------------

    def submit(self, quote_id: str, device_id: Optional[str], payload: Any) -> Submission:
        """提交填空答案，每个设备每天每条名言只能提交或跳过一次"""
        with LogContext("QuizManager", "submit", quote_id=quote_id, device_id=device_id):
            device_id = self._require_device(device_id)
            with self._lock:
                self._require_quote(quote_id)
                key = self._lock_key(quote_id, device_id)
                self._require_open(key)
                fill_a, fill_b = self._validate_fills(payload)

                submission = self.submissions.create(quote_id, device_id, fill_a, fill_b)
                self.locks.lock(key)

            quiz_logger.info(f"[QuizManager] Submission {submission.id} accepted for {key}")
            return submission

    def skip(self, quote_id: str, device_id: Optional[str]) -> None:
        """跳过今日名言，不创建提交"""
        with LogContext("QuizManager", "skip", quote_id=quote_id, device_id=device_id):
            device_id = self._require_device(device_id)
            with self._lock:
                self._require_quote(quote_id)
                key = self._lock_key(quote_id, device_id)
                if not self.locks.acquire(key):
                    raise self._conflict(key)

            quiz_logger.info(f"[QuizManager] Skip recorded for {key}")

    def toggle_like(self, submission_id: str, device_id: Optional[str]) -> int:
        """切换点赞，同一设备两次调用相互抵消"""
        with LogContext("QuizManager", "like", submission_id=submission_id, device_id=device_id):
            device_id = self._require_device(device_id)
            with self._lock:
                likes = self.submissions.toggle_like(submission_id, device_id)
            if likes is None:
                raise NotFoundError(
                    "Submission not found",
                    ErrorCodes.SUBMISSION_NOT_FOUND,
                    context={'submission_id': submission_id}
                )
            return likes

    # ---- internals -----------------------------------------------------------

    def _current_day(self) -> date:
        """每次操作只取一次日期，跨日时按需清理旧锁"""
        today = self.clock.today()
        if today != self._last_day:
            if self._last_day is not None and self.evict_stale_locks:
                self.locks.purge_before(today)
            self._last_day = today
        return today

    def _lock_key(self, quote_id: str, device_id: str) -> LockKey:
        return self.locks.key(quote_id, device_id, self._current_day())

    @staticmethod
    def _require_device(device_id: Optional[str]) -> str:
        if not device_id:
            raise ClientInputError(
                "X-Device-Id header required",
                ErrorCodes.INPUT_MISSING_DEVICE_ID
            )
        return device_id

    def _require_quote(self, quote_id: str) -> Quote:
        quote = self.catalog.get(quote_id)
        if quote is None:
            raise NotFoundError(
                "Quote not found",
                ErrorCodes.QUOTE_NOT_FOUND,
                context={'quote_id': quote_id}
            )
        return quote

    def _require_open(self, key: LockKey) -> None:
        if self.locks.is_locked(key):
            raise self._conflict(key)

    @staticmethod
    def _conflict(key: LockKey) -> ConflictError:
        return ConflictError(
            "Already submitted or skipped today",
            ErrorCodes.DAY_ALREADY_LOCKED,
            context={'quote_id': key.quote_id, 'day': format_day_key(key.day)}
        )

    def _validate_fills(self, payload: Any) -> Tuple[str, str]:
        try:
            data = self._input_model.model_validate(payload)
        except ValidationError as e:
            raise ClientInputError(
                "Invalid body",
                ErrorCodes.INPUT_INVALID_BODY,
                issues=format_validation_issues(e)
            ) from e
        return data.fillA, data.fillB
