"""
mdrender 命令入口
将 Markdown 转换为带样式的 HTML 或 PDF
"""
import asyncio
import os
import sys
from typing import Mapping, Optional, Sequence

from loguru import logger

from .application import ConversionOrchestrator
from .handlers import CommandHandler
from .types import ConvertConfig

ENV_PREFIX = "MDRENDER_"


def load_config(environ: Mapping[str, str] = os.environ) -> ConvertConfig:
    """从 MDRENDER_* 环境变量读取配置，如 MDRENDER_PDF_ENGINE=browser

    Raises:
        ValueError: 未知的PDF策略或日志级别
    """
    config = {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX)
    }
    result = ConvertConfig.from_mapping(config)
    # 未注册的级别名会抛出 ValueError
    logger.level(result.log_level)
    return result


def setup_logging(level: str) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        config = load_config()
    except ValueError as e:
        logger.error(f"[MdRender] 配置无效: {e}")
        return 2

    setup_logging(config.log_level)

    handler = CommandHandler(ConversionOrchestrator(config))
    result = asyncio.run(handler.handle(args))

    if not result.success:
        logger.error(f"[MdRender] {result.error_message}")
        return 1

    logger.info(f"[MdRender] 已生成: {result.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
