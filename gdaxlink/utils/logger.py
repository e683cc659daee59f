import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name="gdaxlink", level="INFO", log_dir=None, backup_count=30):
    """
    Configure a logger once; later calls return it unchanged.

    Args:
        name: logger name, 'gdaxlink' covers every module of the package
        level: logging level name or number
        log_dir: add a midnight-rotating file handler writing <log_dir>/<name>.log
        backup_count: rotated files to keep
    """
    logger = logging.getLogger(name)
    logger.setLevel(level if isinstance(level, int) else str(level).upper())

    # avoid adding handlers twice
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        handler = TimedRotatingFileHandler(
            filename=log_path / f"{name}.log",
            when='midnight',
            interval=1,
            backupCount=backup_count,
            encoding='utf-8'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
