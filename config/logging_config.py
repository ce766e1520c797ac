"""Rich-handler logging preset."""
import logging
from rich.logging import RichHandler
from .app_config import settings

def configure(level: str = None):
    logging.basicConfig(
        level=getattr(logging, level or settings.LOG_LEVEL),
        format="%(asctime)s │ %(name)-24s │ %(message)s",
        datefmt="%H:%M:%S",
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )
    # uvicorn ships its own handlers; route them through rich as well
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True
