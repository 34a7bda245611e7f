"""
Submission store.
Keeps every submission by id and toggles likes per device.
"""

import secrets
import threading
from typing import Callable, Dict, List, Optional

from utils.exceptions import InternalError, ErrorCodes
from utils.logging_manager import store_logger

from .models import Submission


def generate_submission_id(length: int = 12) -> str:
    """生成URL安全的随机ID"""
    return secrets.token_urlsafe(length)[:length]


class SubmissionStore:
    """提交存储（线程安全）"""

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        self._submissions: Dict[str, Submission] = {}
        self._id_factory = id_factory or generate_submission_id
        self._mutex = threading.Lock()

    def create(self, quote_id: str, device_id: str, fill_a: str, fill_b: str) -> Submission:
        """创建提交，调用前须已完成校验"""
        submission_id = self._id_factory()
        with self._mutex:
            if submission_id in self._submissions:
                raise InternalError(
                    f"Duplicate submission id generated: {submission_id}",
                    ErrorCodes.DUPLICATE_SUBMISSION_ID
                )
            submission = Submission(
                id=submission_id,
                quote_id=quote_id,
                device_id=device_id,
                fill_a=fill_a,
                fill_b=fill_b,
            )
            self._submissions[submission_id] = submission

        store_logger.debug(f"[SubmissionStore] Created submission {submission_id} for quote {quote_id}")
        return submission

    def get(self, submission_id: str) -> Optional[Submission]:
        """根据ID获取提交"""
        with self._mutex:
            return self._submissions.get(submission_id)

    def list_by_quote(self, quote_id: str) -> List[Submission]:
        """获取某条名言的全部提交（无序）"""
        with self._mutex:
            return [s for s in self._submissions.values() if s.quote_id == quote_id]

    def toggle_like(self, submission_id: str, device_id: str) -> Optional[int]:
        """切换点赞状态，返回最新点赞数；提交不存在返回 None"""
        with self._mutex:
            submission = self._submissions.get(submission_id)
            if submission is None:
                return None
            if device_id in submission.likes:
                submission.likes.discard(device_id)
            else:
                submission.likes.add(device_id)
            return len(submission.likes)

    def __len__(self) -> int:
        with self._mutex:
            return len(self._submissions)
