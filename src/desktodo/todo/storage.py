"""JSON Document Storage

タスク一覧（tasks.json）と設定（settings.json）の2つのドキュメントを
データディレクトリ（既定: ~/.todo-app）に保存する。ディスクI/Oはすべてここに集約する。

読み込みは寛容ポリシー: ファイルが壊れている場合は空の一覧／デフォルト設定を返し、
ファイル自体には手を付けない。一時的に途中まで書かれたファイルを読むと
データが見えなくなる点に注意（警告ログを出す）。

Related Classes: Task, Settings (models.py), TaskService (service.py)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from .exceptions import DirectoryResolutionError, StorageIOError
from .models import Settings, Task

logger = logging.getLogger(__name__)

APP_DIR_NAME = ".todo-app"
TASKS_FILE_NAME = "tasks.json"
SETTINGS_FILE_NAME = "settings.json"

_TASK_LIST = TypeAdapter(List[Task])


def resolve_data_dir(home: Optional[Path] = None) -> Path:
    """データディレクトリのパスを求める

    Args:
        home: ホームディレクトリ（省略時はOSから取得）

    Raises:
        DirectoryResolutionError: ホームディレクトリを特定できない場合
    """
    if home is None:
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as exc:
            raise DirectoryResolutionError("Unable to determine the user home directory") from exc
    return Path(home) / APP_DIR_NAME


def serialize_tasks(tasks: List[Task]) -> str:
    """タスク一覧を整形済みJSON文字列に変換"""
    return _TASK_LIST.dump_json(tasks, indent=2, by_alias=True).decode("utf-8")


def parse_tasks(payload: Union[str, bytes]) -> List[Task]:
    """JSON文字列をタスク一覧として厳密に解釈する

    Raises:
        pydantic.ValidationError: JSONとして不正、またはスキーマ不一致の場合
    """
    return _TASK_LIST.validate_json(payload)


def validate_tasks(document: Any) -> List[Task]:
    """デコード済みのJSON値をタスク一覧として検証する"""
    return _TASK_LIST.validate_python(document)


class JsonStorage:
    """JSONファイルベースのドキュメントストア

    ファイル単位で丸ごと上書きする（部分更新・ジャーナルなし）。
    プロセス内の同時実行制御はTaskService側の責務。
    """

    def __init__(self, data_dir: Optional[Union[str, Path]] = None) -> None:
        self.data_dir = Path(data_dir).expanduser() if data_dir else resolve_data_dir()
        self.ensure_data_dir()
        logger.info("JsonStorage ready dir=%s", self.data_dir)

    @property
    def tasks_path(self) -> Path:
        return self.data_dir / TASKS_FILE_NAME

    @property
    def settings_path(self) -> Path:
        return self.data_dir / SETTINGS_FILE_NAME

    def data_dir_path(self) -> str:
        return str(self.data_dir.resolve())

    def ensure_data_dir(self) -> None:
        """データディレクトリを作成（存在すれば何もしない）"""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageIOError(self.data_dir, exc) from exc

    def _read_bytes(self, path: Path) -> Optional[bytes]:
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageIOError(path, exc) from exc

    def _write_text(self, path: Path, content: str) -> None:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise StorageIOError(path, exc) from exc

    def load_tasks(self) -> List[Task]:
        """タスク一覧を読み込む（ファイルなし・破損時は空リスト）"""
        raw = self._read_bytes(self.tasks_path)
        if raw is None:
            return []
        try:
            return parse_tasks(raw)
        except ValidationError as exc:
            logger.warning(
                "Unreadable tasks file %s, using an empty collection (%d errors)",
                self.tasks_path,
                exc.error_count(),
            )
            return []

    def save_tasks(self, tasks: List[Task]) -> None:
        self._write_text(self.tasks_path, serialize_tasks(tasks))
        logger.debug("Saved %d tasks to %s", len(tasks), self.tasks_path)

    def load_settings(self) -> Settings:
        """設定を読み込む

        ファイルがなければデフォルト設定を保存して返す。
        壊れている場合はデフォルト設定を返すがファイルは書き換えない。
        """
        raw = self._read_bytes(self.settings_path)
        if raw is None:
            settings = Settings()
            self.save_settings(settings)
            logger.info("Created default settings at %s", self.settings_path)
            return settings
        try:
            return Settings.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Unreadable settings file %s, using defaults (%d errors)",
                self.settings_path,
                exc.error_count(),
            )
            return Settings()

    def save_settings(self, settings: Settings) -> None:
        self._write_text(self.settings_path, settings.model_dump_json(indent=2, by_alias=True))
