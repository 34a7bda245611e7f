"""
API data models for the quiz system.
Pydantic models for the JSON responses; field names on the wire are camelCase.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from store import Quote, RankingItem


class QuoteResponse(BaseModel):
    """名言响应模型"""
    id: str = Field(..., description="名言ID")
    template: str = Field(..., description="含 (A)/(B) 两个空位的模板")
    author: str = Field(..., description="作者")
    answer_a: str = Field(..., alias="answerA", description="空位A答案")
    answer_b: str = Field(..., alias="answerB", description="空位B答案")

    class Config:
        populate_by_name = True

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteResponse":
        return cls(
            id=quote.id,
            template=quote.template,
            author=quote.author,
            answer_a=quote.answer_a,
            answer_b=quote.answer_b,
        )


class TodayQuoteResponse(BaseModel):
    """今日名言响应模型"""
    quote: QuoteResponse = Field(..., description="今日名言")
    locked: bool = Field(..., description="当前设备今天是否已提交或跳过")


class SubmissionCreatedResponse(BaseModel):
    """提交创建响应模型"""
    id: str = Field(..., description="提交ID")


class RankingItemResponse(BaseModel):
    """排行榜条目响应模型"""
    id: str = Field(..., description="提交ID")
    quote_id: str = Field(..., alias="quoteId", description="名言ID")
    fill_a: str = Field(..., alias="fillA", description="空位A填写")
    fill_b: str = Field(..., alias="fillB", description="空位B填写")
    likes: int = Field(..., description="点赞数", ge=0)

    class Config:
        populate_by_name = True

    @classmethod
    def from_item(cls, item: RankingItem) -> "RankingItemResponse":
        return cls(
            id=item.id,
            quote_id=item.quote_id,
            fill_a=item.fill_a,
            fill_b=item.fill_b,
            likes=item.likes,
        )


class RankingResponse(BaseModel):
    """排行榜响应模型"""
    items: List[RankingItemResponse] = Field(default_factory=list, description="按点赞数降序排列的提交")


class LikeResponse(BaseModel):
    """点赞切换响应模型"""
    likes: int = Field(..., description="当前点赞数", ge=0)


class HealthResponse(BaseModel):
    """健康检查响应模型"""
    ok: bool = True


class StatsResponse(BaseModel):
    """运行状态响应模型"""
    quotes: int = Field(..., description="名言数量")
    submissions: int = Field(..., description="提交数量")
    locks: int = Field(..., description="当日锁数量（含未清理的旧锁）")
    day: str = Field(..., description="当前日期键")


class ErrorResponse(BaseModel):
    """错误响应模型"""
    message: str = Field(..., description="错误信息")
    issues: Optional[List[Dict[str, Any]]] = Field(None, description="逐字段校验问题")
