import logging
from logging.handlers import RotatingFileHandler
from rich.logging import RichHandler

LOGGER_NAME = "vscan"

def get_logger(name: str = None) -> logging.Logger:
    # name = "pluginload" -> "vscan.pluginload" 로거 이름 통일
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)

def init_logger(verbose: bool=False, log_file: str=None) -> logging.Logger:
    # 중앙 로거 초기화 함수
    logger = get_logger()

    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # RichHandler for console output
    rh = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
    logger.addHandler(rh)

    if log_file:
        fmt = logging.Formatter("[%(asctime)s] %(levelname)s in %(module)s:%(lineno)d: %(message)s")
        fh = RotatingFileHandler(log_file, maxBytes=10*1024*1024, backupCount=5)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger

def log_write(fmt: str, *args) -> None:
    # 플러그인 로드 추적용 로그 싱크 ("Loading %s" 등)
    get_logger("pluginload").info(fmt, *args)
