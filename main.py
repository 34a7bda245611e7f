"""
Main entry point for the Daily Quote Quiz.
Provides command-line interface and system initialization.
"""

import argparse
import sys
from typing import Optional

from utils import api_logger, config_manager, initialize_logging, DayClock


class QuizSystem:
    """问答系统主类"""

    def __init__(self):
        self.config = config_manager

    def start_api_server(self, host: Optional[str] = None, port: Optional[int] = None):
        """启动API服务器"""
        api_config = self.config.get_api_config()

        # 使用配置文件的值，如果命令行参数未提供
        final_host = host if host is not None else api_config.host
        final_port = port if port is not None else api_config.port

        api_logger.info(f"[Main] Starting API server on {final_host}:{final_port}...")

        import uvicorn
        from api.app import app as api_app

        # 状态保存在进程内存中，固定单 worker
        uvicorn.run(api_app, host=final_host, port=final_port, log_level="info")

    def show_system_status(self):
        """显示配置摘要和当前日期键"""
        api_config = self.config.get_api_config()
        quiz_config = self.config.get_quiz_config()
        clock = DayClock(quiz_config.timezone)

        print("Daily Quote Quiz")
        print(f"  - Listen: {api_config.host}:{api_config.port}")
        print(f"  - CORS origins: {', '.join(api_config.cors_origins)}")
        print(f"  - Timezone: {quiz_config.timezone or 'local'}")
        print(f"  - Today: {clock.day_key()}")
        print(f"  - Today's quote: {quiz_config.today_quote_id}")
        print(f"  - Quotes configured: {len(quiz_config.quotes)}")
        print(f"  - Fill length: {quiz_config.fill_min_length}-{quiz_config.fill_max_length}")
        print(f"  - Evict stale locks: {quiz_config.evict_stale_locks}")


def create_parser():
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        description="Daily Quote Quiz - 每日名言填空问答服务",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  python main.py api --host 0.0.0.0 --port 8000  # 启动API服务器
  python main.py status                           # 显示配置和当前日期
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    # API服务器
    api_parser = subparsers.add_parser('api', help='启动API服务器')
    api_parser.add_argument('--host', default=None, help='监听地址 (默认: 配置文件)')
    api_parser.add_argument('--port', type=int, default=None, help='监听端口 (默认: 配置文件或 PORT 环境变量)')

    # 显示系统状态
    subparsers.add_parser('status', help='显示系统状态')

    return parser


def main(argv=None):
    """主函数"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    initialize_logging(use_config_file=True)
    system = QuizSystem()

    try:
        if args.command == 'api':
            system.start_api_server(host=args.host, port=args.port)
        elif args.command == 'status':
            system.show_system_status()
        else:
            parser.print_help()
    except KeyboardInterrupt:
        api_logger.info("[Main] Received keyboard interrupt")
    except Exception as e:
        api_logger.error(f"[Main] System error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
