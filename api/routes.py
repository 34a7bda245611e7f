"""
API routes for the quiz system.
Defines the daily quote, submission, skip, ranking and like endpoints.
"""

import json
from typing import Any, Optional
from fastapi import APIRouter, Depends, Header, Request, Response

from quiz_manager import QuizManager
from utils import api_logger
from .models import (
    TodayQuoteResponse,
    QuoteResponse,
    SubmissionCreatedResponse,
    RankingResponse,
    RankingItemResponse,
    LikeResponse,
    StatsResponse,
    ErrorResponse,
)

router = APIRouter()

DEVICE_HEADER = "X-Device-Id"


def get_quiz_manager(request: Request) -> QuizManager:
    """从应用状态获取问答管理器"""
    return request.app.state.quiz_manager


def get_device_id(x_device_id: Optional[str] = Header(None, alias=DEVICE_HEADER)) -> Optional[str]:
    """读取设备ID，空字符串视为未提供"""
    return x_device_id or None


async def read_json_body(request: Request) -> Any:
    """读取JSON请求体，空请求体视为 {}，无法解析时返回 None"""
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        api_logger.debug(f"[API] Malformed JSON body on {request.url.path}")
        return None


# Today's quote
@router.get("/quotes/today", response_model=TodayQuoteResponse, tags=["Quotes"])
async def get_today_quote(
    device_id: Optional[str] = Depends(get_device_id),
    manager: QuizManager = Depends(get_quiz_manager)
):
    """获取今日名言"""
    quote, locked = manager.today(device_id)
    return TodayQuoteResponse(quote=QuoteResponse.from_quote(quote), locked=locked)


@router.post(
    "/quotes/{quote_id}/submissions",
    response_model=SubmissionCreatedResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    tags=["Submissions"]
)
async def create_submission(
    quote_id: str,
    request: Request,
    device_id: Optional[str] = Depends(get_device_id),
    manager: QuizManager = Depends(get_quiz_manager)
):
    """提交今日填空答案"""
    payload = await read_json_body(request)
    submission = manager.submit(quote_id, device_id, payload)
    return SubmissionCreatedResponse(id=submission.id)


@router.post(
    "/quotes/{quote_id}/skip",
    status_code=204,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    tags=["Submissions"]
)
async def skip_quote(
    quote_id: str,
    device_id: Optional[str] = Depends(get_device_id),
    manager: QuizManager = Depends(get_quiz_manager)
):
    """跳过今日名言"""
    manager.skip(quote_id, device_id)
    return Response(status_code=204)


@router.get("/quotes/{quote_id}/ranking", response_model=RankingResponse, tags=["Ranking"])
async def get_ranking(
    quote_id: str,
    manager: QuizManager = Depends(get_quiz_manager)
):
    """获取排行榜（点赞数降序）"""
    items = manager.ranking(quote_id)
    return RankingResponse(items=[RankingItemResponse.from_item(item) for item in items])


@router.post(
    "/submissions/{submission_id}/like",
    response_model=LikeResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    tags=["Ranking"]
)
async def toggle_like(
    submission_id: str,
    device_id: Optional[str] = Depends(get_device_id),
    manager: QuizManager = Depends(get_quiz_manager)
):
    """切换点赞"""
    likes = manager.toggle_like(submission_id, device_id)
    return LikeResponse(likes=likes)


# System
@router.get("/stats", response_model=StatsResponse, tags=["System"])
async def get_stats(manager: QuizManager = Depends(get_quiz_manager)):
    """获取运行状态"""
    return StatsResponse(**manager.stats())
