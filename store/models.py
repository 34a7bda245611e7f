"""
Data models for the quiz system.
Plain records shared by the stores, the quiz manager and the API layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Type

from pydantic import BaseModel, Field, StrictStr, ValidationError, create_model


@dataclass(frozen=True)
class Quote:
    """名言记录，创建后不可变"""
    id: str
    template: str
    author: str
    answer_a: str
    answer_b: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Quote":
        """从配置字典创建"""
        return cls(
            id=str(data['id']),
            template=data['template'],
            author=data['author'],
            answer_a=data['answerA'],
            answer_b=data['answerB'],
        )


@dataclass
class Submission:
    """填空提交记录，likes 为点赞设备集合"""
    id: str
    quote_id: str
    device_id: str
    fill_a: str
    fill_b: str
    likes: Set[str] = field(default_factory=set)

    @property
    def like_count(self) -> int:
        return len(self.likes)


@dataclass(frozen=True)
class RankingItem:
    """排行榜条目（快照）"""
    id: str
    quote_id: str
    fill_a: str
    fill_b: str
    likes: int

    @classmethod
    def from_submission(cls, submission: Submission) -> "RankingItem":
        return cls(
            id=submission.id,
            quote_id=submission.quote_id,
            fill_a=submission.fill_a,
            fill_b=submission.fill_b,
            likes=submission.like_count,
        )


def build_submission_input_model(min_length: int = 1, max_length: int = 24) -> Type[BaseModel]:
    """按长度限制构建提交请求体校验模型"""
    fill = (StrictStr, Field(..., min_length=min_length, max_length=max_length))
    return create_model('SubmissionInput', fillA=fill, fillB=fill)


def format_validation_issues(error: ValidationError) -> List[Dict[str, Any]]:
    """把 pydantic 校验错误转换为逐字段问题列表"""
    return [
        {
            'path': list(item['loc']),
            'message': item['msg'],
            'code': item['type'],
        }
        for item in error.errors()
    ]
