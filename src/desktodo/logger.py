"""
ロギング設定モジュール

desktodo パッケージと uvicorn のログを同じハンドラに集約する。
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# desktodo 配下のロガーと、サーバー起動時に出力する uvicorn のロガー
_MANAGED_LOGGERS = ("desktodo", "uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logger(log_level: str = "INFO", log_file: Optional[str] = "logs/todo_desk.log") -> logging.Logger:
    """
    ロガーのセットアップ

    何度呼んでもハンドラは重複しない（前回分を置き換える）。

    Args:
        log_level: ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: ログファイルのパス（空ならコンソールのみ）

    Returns:
        logging.Logger: desktodo パッケージのロガー
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler()]
    if log_file:
        # ログディレクトリの作成
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for name in _MANAGED_LOGGERS:
        target = logging.getLogger(name)
        for handler in list(target.handlers):
            target.removeHandler(handler)
            handler.close()
        if name == "desktodo" or name == "uvicorn":
            for handler in handlers:
                handler.setFormatter(formatter)
                target.addHandler(handler)
            target.propagate = False
        else:
            # uvicorn.error / uvicorn.access は親の uvicorn に流す
            target.propagate = True
        target.setLevel(level)

    return logging.getLogger("desktodo")
