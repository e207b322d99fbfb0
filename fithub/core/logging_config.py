"""
logging.py

표준 logging 설정.

- 앱 시작 시 main.py 에서 한 번만 호출
- 각 모듈은 logging.getLogger(__name__) 로 로거를 얻어 사용
- 정책 엔진(services.roles / services.privacy)은 로그를 남기지 않음

"""

import logging
import sys


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str = "INFO") -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # SQL 로그는 DEBUG 에서도 너무 많아서 WARNING 으로 고정
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
