import logging, pathlib, sys
from typing import Optional
from .config import Settings, get_settings

_FMT = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

def get_logger(name: str, settings: Optional[Settings] = None) -> logging.Logger:
    settings = settings or get_settings()
    logger = logging.getLogger(name)
    logger.setLevel(settings.log_level.upper())

    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        ch = logging.StreamHandler(sys.stderr)
        ch.setFormatter(_FMT)
        logger.addHandler(ch)

    # file handler follows the settings of the latest caller
    wanted = None
    if settings.log_to_file:
        wanted = (pathlib.Path(settings.log_dir) / f"{name}.log").resolve()
    for fh in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
        if wanted is None or pathlib.Path(fh.baseFilename) != wanted:
            logger.removeHandler(fh)
            fh.close()
    if wanted is not None and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        wanted.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(wanted, encoding="utf-8")
        fh.setFormatter(_FMT)
        logger.addHandler(fh)
    return logger
