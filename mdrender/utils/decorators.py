"""
工具层 - AOP装饰器
日志计时、尽力而为的资源清理等横切关注点
"""

import functools
import inspect
import time
from typing import Awaitable, Callable, TypeVar

from loguru import logger

T = TypeVar("T")


def log_execution(func: Callable[..., T]) -> Callable[..., T]:
    """日志装饰器 - 记录函数执行耗时"""

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs) -> T:
        func_name = func.__qualname__
        logger.debug(f"[MdRender] {func_name} 开始执行")
        start_time = time.perf_counter()
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            elapsed = time.perf_counter() - start_time
            logger.debug(f"[MdRender] {func_name} 执行失败，耗时: {elapsed:.2f}s, 错误: {e}")
            raise
        elapsed = time.perf_counter() - start_time
        logger.debug(f"[MdRender] {func_name} 执行完成，耗时: {elapsed:.2f}s")
        return result

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs) -> T:
        func_name = func.__qualname__
        logger.debug(f"[MdRender] {func_name} 开始执行")
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed = time.perf_counter() - start_time
            logger.debug(f"[MdRender] {func_name} 执行失败，耗时: {elapsed:.2f}s, 错误: {e}")
            raise
        elapsed = time.perf_counter() - start_time
        logger.debug(f"[MdRender] {func_name} 执行完成，耗时: {elapsed:.2f}s")
        return result

    if inspect.iscoroutinefunction(func):
        return async_wrapper
    return sync_wrapper


async def best_effort(action: str, call: Callable[[], Awaitable[object]]) -> None:
    """执行清理动作，失败只记录警告，从不抛出"""
    try:
        await call()
    except Exception as e:
        logger.warning(f"[MdRender] {action}失败(已忽略): {type(e).__name__}: {e}")


def best_effort_sync(action: str, call: Callable[[], object]) -> None:
    """best_effort 的同步版本"""
    try:
        call()
    except Exception as e:
        logger.warning(f"[MdRender] {action}失败(已忽略): {type(e).__name__}: {e}")
