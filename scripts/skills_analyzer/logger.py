#------------------------------------------------------------
#                         logger.py
#         Sets up console logging for the analyzer.

import logging

ROOT_LOGGER_NAME = "skills_analyzer"
CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
CONSOLE_DATE_FORMAT = "%H:%M:%S"

# This function does return a logger under the analyzer root logger.
# Names already inside the root namespace are used as they are.
def get_logger(name: str) -> logging.Logger:
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

# This function does attach one console handler to the root logger.
# Repeated calls only change the level, so records are never duplicated.
def configure_logging(verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT))
        logger.addHandler(console_handler)
    for handler in logger.handlers:
        handler.setLevel(level)

    logger.propagate = False
    return logger
