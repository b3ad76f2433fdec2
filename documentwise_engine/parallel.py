"""
Parallel loading helper.

Pages issue their independent reads (e.g. the proposal and the sidebar list)
together and join them before rendering.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Dict, Optional

DEFAULT_MAX_WORKERS = 4


def load_parallel(max_workers: Optional[int] = None, **loaders: Callable[[], Any]) -> Dict[str, Any]:
    """
    Run each loader on a worker thread and wait for all of them.

    Args:
        max_workers: Thread cap (defaults to the number of loaders, at most 4)
        **loaders: name -> zero-argument callable

    Returns:
        name -> loader return value. Loaders are expected to return
        ActionResults; an exception from a loader propagates.
    """
    if not loaders:
        return {}
    workers = max_workers or min(len(loaders), DEFAULT_MAX_WORKERS)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="documentwise-load") as executor:
        futures = {name: executor.submit(loader) for name, loader in loaders.items()}
        return {name: future.result() for name, future in futures.items()}
