"""Todoストレージ層のカスタム例外定義

ストレージ・サービス層で送出され、リクエストゲートウェイとCLIで
ユーザー向けメッセージに変換される。

JSONの破損（寛容な読み込み）と対象IDが存在しないケースは例外ではなく、
空の値・None・Falseとして返す。
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


class TodoAppError(Exception):
    """Todo App基底例外"""

    pass


class DirectoryResolutionError(TodoAppError):
    """ホームディレクトリを特定できない（起動時の致命的エラー）"""

    pass


class StorageIOError(TodoAppError):
    """ドキュメントの読み書きに失敗"""

    def __init__(self, path: Union[str, Path], error: OSError) -> None:
        self.path = Path(path)
        self.reason = error.strerror or str(error)
        super().__init__(f"{self.path}: {self.reason}")


class TaskServiceError(TodoAppError):
    """サービス層でのストレージ失敗（原因の例外を保持）"""

    def __init__(self, cause: TodoAppError) -> None:
        self.cause = cause
        super().__init__(str(cause))


class ImportFormatError(TodoAppError):
    """インポートデータがタスク配列として解釈できない"""

    pass


class LockAcquisitionError(TodoAppError):
    """ストアのロックを取得できない（タイムアウトまたは過去の異常終了）"""

    pass
