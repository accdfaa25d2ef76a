"""
로깅 설정 관리자
=========================
Author: Jin
Date: 2026.03.02
Version: 2.0

Description:
My GPT 서버와 CLI가 함께 쓰는 로거를 구성합니다.
모든 로그는 stdout으로 나가고, 로그 디렉토리가 있을 때만 파일에도 남깁니다.
메시지는 "[구성요소] 내용" 형식으로 남기며, 오류 로그에는 kind=... 필드를 붙입니다.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from .settings import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    name: str = "MyGPT",
    level: Optional[str] = None,
    log_dir: Optional[Path] = None
) -> logging.Logger:
    """
    My GPT 로거 구성

    같은 이름으로 다시 호출하면 핸들러를 새로 교체합니다.

    Args:
        name: 로거 이름
        level: 로그 레벨 이름 (None이면 LOG_LEVEL, 알 수 없는 값이면 INFO)
        log_dir: 파일 로그 디렉토리 (None이면 설정의 logs 경로)

    Returns:
        logging.Logger: 설정된 로거
    """
    level_name = (level or settings.log_level).upper()
    log_dir = log_dir or settings.logs_path

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    if log_dir.is_dir():
        file_handler = logging.FileHandler(log_dir / f"{name}.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


logger = setup_logging()
