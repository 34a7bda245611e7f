"""
Middleware for the quiz system API.
Provides CORS, request logging and error-to-response mapping.
"""

import time
from typing import Callable, List
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from utils import api_logger, QuizSystemError, create_error_response


class LoggingMiddleware(BaseHTTPMiddleware):
    """日志中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()

        api_logger.info(f"[API] {request.method} {request.url.path}")

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            api_logger.info(f"[API] {request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s")

            # 添加处理时间到响应头
            response.headers["X-Process-Time"] = str(process_time)

            return response

        except Exception as e:
            process_time = time.time() - start_time
            api_logger.error(f"[API] {request.method} {request.url.path} - ERROR - {process_time:.3f}s - {str(e)}")
            raise


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """错误处理中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except QuizSystemError as e:
            if e.status_code >= 500:
                api_logger.error(f"[API] Internal error: {str(e)}", exc_info=True)
            else:
                api_logger.warning(f"[API] {request.method} {request.url.path} rejected: {str(e)}")
            return JSONResponse(
                status_code=e.status_code,
                content=create_error_response(e)
            )

        except Exception as e:
            api_logger.error(f"[API] Unexpected error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"message": "Internal error"}
            )


def setup_cors(app, cors_origins: List[str]):
    """设置CORS"""
    wildcard = "*" in cors_origins
    if wildcard:
        api_logger.warning("[CORS] Using wildcard origin; any site may call this API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=not wildcard,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def setup_middleware(app, cors_origins: List[str]):
    """设置所有中间件"""
    # 添加中间件（顺序很重要，后添加的在外层）
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(LoggingMiddleware)

    # CORS 放在最外层，错误响应也带跨域头
    setup_cors(app, cors_origins)

    api_logger.info("[API] Middleware setup completed")
