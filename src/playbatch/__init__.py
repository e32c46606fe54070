# Avoid importing Playwright at top-level so the models stay usable without it
__all__ = ["BatchExecutor", "BatchConfig", "WorkItem"]

def __getattr__(name):
    if name == "BatchExecutor":
        from .automation.runner import BatchExecutor
        return BatchExecutor
    if name == "BatchConfig":
        from .core.config import BatchConfig
        return BatchConfig
    if name == "WorkItem":
        from .core.models import WorkItem
        return WorkItem
    raise AttributeError(name)
