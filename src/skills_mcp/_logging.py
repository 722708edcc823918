import logging
import os


def configure_logging(verbose: bool = False) -> None:
    """Set up stderr logging for the server process.

    stdout carries the MCP stdio transport, so nothing may log there.
    ``verbose`` selects DEBUG; otherwise LOG_LEVEL applies, defaulting to
    ERROR so problems with individual skill files stay quiet.
    """
    log_level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "ERROR").upper()

    if logging.root.handlers:
        logging.root.setLevel(log_level)
        return

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
