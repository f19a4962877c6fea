import asyncio
from typing import Any, Awaitable, List

from teamdrive.core.exceptions import OperationTimeoutError
from teamdrive.utils.logging import get_logger

logger = get_logger(__name__)


async def with_deadline(awaitable: Awaitable[Any], timeout: float, operation: str) -> Any:
    """Await with a fixed deadline; a missed deadline becomes OperationTimeoutError"""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(f"Deadline of {timeout}s exceeded - operation: {operation}")
        raise OperationTimeoutError(f"Operation timed out: {operation}")


async def gather_or_cancel(*awaitables: Awaitable[Any]) -> List[Any]:
    """Run awaitables concurrently; on the first failure cancel the rest and re-raise it"""
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except Exception:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
