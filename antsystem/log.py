from __future__ import annotations
import logging
from typing import Optional

from colorama import Fore, Back, Style, init

init(autoreset=True)

FORMAT = "[%(asctime)s] %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%H:%M:%S"


class ColorFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": Fore.BLUE,
        "INFO": Fore.CYAN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Back.RED + Fore.WHITE,
    }

    def format(self, record):
        # copy so the file handler still sees plain names
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, Fore.WHITE)
        record.levelname = f"{color}{record.levelname}{Style.RESET_ALL}"
        record.name = f"{Fore.MAGENTA}{record.name}{Style.RESET_ALL}"
        return super().format(record)


def get_logger(name: str = "antsystem", level: int = logging.INFO, logfile: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logger.setLevel(level)

    console = logging.StreamHandler()
    console.setFormatter(ColorFormatter(FORMAT, datefmt=DATEFMT))
    logger.addHandler(console)

    if logfile:
        fh = logging.FileHandler(logfile, encoding="utf-8")
        fh.setFormatter(logging.Formatter(FORMAT, datefmt=DATEFMT))
        logger.addHandler(fh)

    return logger
