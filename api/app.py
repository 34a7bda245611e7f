"""
FastAPI application for the quiz system.
Main application entry point for the API server.
"""

from contextlib import asynccontextmanager
from typing import Optional
import uvicorn
from fastapi import FastAPI

from quiz_manager import QuizManager
from utils import api_logger, config_manager, UnifiedConfigManager

from .models import HealthResponse
from .routes import router
from .middleware import setup_middleware

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    api_logger.info("[API] Starting Daily Quote Quiz API...")
    yield
    # 内存状态随进程结束而丢失
    stats = app.state.quiz_manager.stats()
    api_logger.info(
        f"[API] Shutting down; discarding {stats['submissions']} submissions and {stats['locks']} locks"
    )


def create_app(config: Optional[UnifiedConfigManager] = None,
               quiz_manager: Optional[QuizManager] = None) -> FastAPI:
    """创建应用，每次调用都持有独立的问答状态"""
    config = config or config_manager
    api_config = config.get_api_config()

    application = FastAPI(
        title="Daily Quote Quiz API",
        description="Fill-in-the-blank quote of the day with daily submission lock and like ranking",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    application.state.quiz_manager = quiz_manager or QuizManager.from_config(config.get_quiz_config())

    # 设置中间件
    setup_middleware(application, api_config.cors_origins)

    # 添加路由
    application.include_router(router)

    @application.get("/", tags=["System"])
    async def root():
        """根路径"""
        return {
            "message": "Daily Quote Quiz API",
            "version": API_VERSION,
            "docs": "/docs",
            "status": "running"
        }

    @application.get("/health", response_model=HealthResponse, tags=["System"])
    async def health_check():
        """健康检查端点"""
        return HealthResponse(ok=True)

    return application


app = create_app()


if __name__ == "__main__":
    api_config = config_manager.get_api_config()
    api_logger.info(f"[API] Starting server on {api_config.host}:{api_config.port}")

    # 状态保存在进程内存中，只能单进程运行
    if api_config.reload:
        uvicorn.run("api.app:app", host=api_config.host, port=api_config.port, reload=True, log_level="info")
    else:
        uvicorn.run(app, host=api_config.host, port=api_config.port, log_level="info")
