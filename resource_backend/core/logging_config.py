# _*_ coding: utf-8 _*_
"""환경변수 기반 로깅 설정.

콘솔은 coloredlogs 포맷, LOG_TO_FILE 이 켜진 경우 파일 핸들러를 추가한다.
uvicorn 로거도 같은 핸들러로 보낸다.
"""
import glob
import logging
import logging.config
import os
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)

CONSOLE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-5s %(process)5d --- [%(funcName)20s] %(name)-40s : %(message)s"
FILE_FORMAT = "[%(asctime)s.%(msecs)03d] %(levelname)s [%(thread)d] %(name)s - %(message)s"

# TimedRotatingFileHandler 는 월 단위를 지원하지 않아 30일 간격으로 대체
_TIMED_ROTATION = {
    "daily": ("midnight", 1),
    "weekly": ("W0", 1),
    "monthly": ("midnight", 30),
}


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _file_handler(settings, level: int) -> dict:
    handler = {
        "level": level,
        "formatter": "default",
        "filename": os.path.join(settings.log_dir, settings.log_file),
        "encoding": "utf-8",
    }
    if settings.log_rotation == "size":
        # 10MB, 최대 5개
        handler.update({
            "class": "logging.handlers.RotatingFileHandler",
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
        })
    else:
        when, interval = _TIMED_ROTATION.get(settings.log_rotation, _TIMED_ROTATION["daily"])
        handler.update({
            "class": "logging.handlers.TimedRotatingFileHandler",
            "when": when,
            "interval": interval,
            "backupCount": settings.log_retention_days,
        })
    return handler


def build_logging_config(settings) -> dict:
    """dictConfig 에 넘길 설정 생성"""
    app_level = _level(settings.app_log_level)
    server_level = _level(settings.server_log_level)

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": app_level,
            "formatter": "colored",
            "stream": "ext://sys.stdout",
        }
    }
    if settings.log_to_file:
        handlers["file"] = _file_handler(settings, app_level)
    handler_names = list(handlers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": FILE_FORMAT},
            "colored": {"()": "coloredlogs.ColoredFormatter", "fmt": CONSOLE_FORMAT},
        },
        "handlers": handlers,
        "loggers": {
            "": {"level": app_level, "handlers": handler_names},
            "uvicorn": {"level": server_level, "handlers": handler_names, "propagate": False},
            "uvicorn.access": {"level": server_level, "handlers": handler_names, "propagate": False},
        },
    }


def cleanup_old_logs(log_dir: str, log_file: str, retention_days: int, now: datetime = None) -> int:
    """보관 기간이 지난 날짜별 로테이션 파일 (app.log.YYYY-MM-DD) 삭제. 삭제한 개수 반환

    현재 로그 파일과 날짜 접미사가 없는 파일 (app.log.1 등)은 건드리지 않는다.
    """
    cutoff = (now or datetime.now()) - timedelta(days=retention_days)
    deleted = 0
    for path in glob.glob(os.path.join(log_dir, f"{log_file}.*")):
        suffix = path.rsplit(".", 1)[-1]
        try:
            rotated_on = datetime.strptime(suffix, "%Y-%m-%d")
        except ValueError:
            continue
        if rotated_on >= cutoff:
            continue
        try:
            os.remove(path)
            deleted += 1
        except OSError as e:
            logger.warning(f"로그 파일 삭제 실패: {path}: {e}")

    if deleted:
        logger.info(f"오래된 로그 파일 {deleted}개 삭제 (보관 기간: {retention_days}일)")
    return deleted


def setup_logging(settings):
    if settings.log_to_file:
        os.makedirs(settings.log_dir, exist_ok=True)

    logging.config.dictConfig(build_logging_config(settings))
    logger.info(
        f"로깅 설정 완료 - 앱 로그 레벨: {settings.app_log_level.upper()}, "
        f"서버 로그 레벨: {settings.server_log_level.upper()}"
    )

    if settings.log_to_file:
        cleanup_old_logs(settings.log_dir, settings.log_file, settings.log_retention_days)
