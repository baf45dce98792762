"""ButterDish — Fallback Chain Combinator."""

import inspect
from typing import Any, Awaitable, Callable, List, Sequence, Tuple, Union

from app.core.logging import get_logger

logger = get_logger("fallback")

Strategy = Callable[[], Union[List[Any], Awaitable[List[Any]]]]


async def first_non_empty(
    strategies: Sequence[Tuple[str, Strategy]],
) -> Tuple[str, List[Any]]:
    """Run named strategies in order and return the first non-empty result.

    Each strategy is a zero-argument callable returning a list (or an
    awaitable of one). A strategy that raises is logged and treated as a
    miss. Returns ``("", [])`` when every strategy is exhausted.
    """
    for name, strategy in strategies:
        try:
            result = strategy()
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.warning(
                f"Strategy '{name}' failed: {e}",
                extra={"strategy": name, "error_code": getattr(e, "code", "INTERNAL_ERROR")},
            )
            continue

        if result:
            logger.info(
                f"Strategy '{name}' produced {len(result)} records",
                extra={"strategy": name},
            )
            return name, list(result)
        logger.info(f"Strategy '{name}' produced no records", extra={"strategy": name})

    return "", []
