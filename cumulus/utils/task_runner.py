"""A utility module to facilitate running & managing asyncio Tasks."""

import logging
from asyncio import ALL_COMPLETED, CancelledError, Task, wait
from typing import Any

logger = logging.getLogger(__name__)


async def settle(tasks: list[Task]) -> list[Any | BaseException]:
    """Wait for every task to reach a terminal state and collect their outcomes.

    Unlike `asyncio.gather()` without `return_exceptions`, a task that raises never
    cancels or short-circuits its siblings: the call returns only once all of them
    have finished.

    Args:
    - tasks: A list of Tasks.

    Returns: a list with, for each input task and in the same order, either its
    result or the exception it raised.
    """
    if len(tasks) == 0:
        return []

    await wait(tasks, return_when=ALL_COMPLETED)

    outcomes: list[Any | BaseException] = []
    for task in tasks:
        if task.cancelled():
            logger.warning(f"Task {task.get_name()} was cancelled before it settled")
            outcomes.append(CancelledError(task.get_name()))
        elif (exc := task.exception()) is not None:
            outcomes.append(exc)
        else:
            outcomes.append(task.result())

    return outcomes
