import logging
from rich.logging import RichHandler
def setup_logging(level: str = "WARNING"):
    logging.basicConfig(level="WARNING", format="%(message)s", datefmt="[%X]", handlers=[RichHandler(rich_tracebacks=True)])
    log = logging.getLogger("describekit")
    log.setLevel(level)
    return log
