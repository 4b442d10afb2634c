"""Task Service

JsonStorage上でタスク一覧を「全体読み込み → 変更 → 全体書き込み」の
トランザクションとして操作する。すべての操作は1つのロックの下で直列化される。

Related Classes: JsonStorage (storage.py), RequestGateway (server/gateway.py)
"""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from datetime import date
from typing import Iterator, List, Optional, Tuple, Union

from pydantic import ValidationError

from .exceptions import (
    ImportFormatError,
    LockAcquisitionError,
    StorageIOError,
    TaskServiceError,
    TodoAppError,
)
from .models import Attachment, Priority, Settings, Task, TaskFilter, TaskStats, TaskUpdate
from .storage import JsonStorage, serialize_tasks, validate_tasks

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 10.0


def _due_day(task: Task) -> Optional[date]:
    if not task.due_date:
        return None
    try:
        return date.fromisoformat(task.due_date[:10])
    except ValueError:
        return None


def _is_overdue(task: Task, today: date) -> bool:
    due = _due_day(task)
    return not task.completed and due is not None and due < today


def compute_stats(tasks: List[Task], today: Optional[date] = None) -> TaskStats:
    """読み込み済みのタスク一覧を集計する（ストレージには触れない）"""
    today = today or date.today()
    stats = TaskStats(total=len(tasks))
    for task in tasks:
        if task.completed:
            stats.completed += 1
        if task.priority is Priority.HIGH:
            stats.high_priority += 1
        elif task.priority is Priority.MEDIUM:
            stats.medium_priority += 1
        else:
            stats.low_priority += 1

        if _due_day(task) == today:
            stats.today += 1
        if _is_overdue(task, today):
            stats.overdue += 1
    stats.pending = stats.total - stats.completed
    return stats


def filter_tasks(
    tasks: List[Task],
    task_filter: TaskFilter = TaskFilter.ALL,
    search: Optional[str] = None,
    today: Optional[date] = None,
) -> List[Task]:
    """状態フィルタとキーワード（タイトル・説明の部分一致）で絞り込む"""
    today = today or date.today()

    if task_filter is TaskFilter.PENDING:
        selected = [t for t in tasks if not t.completed]
    elif task_filter is TaskFilter.COMPLETED:
        selected = [t for t in tasks if t.completed]
    elif task_filter is TaskFilter.OVERDUE:
        selected = [t for t in tasks if _is_overdue(t, today)]
    elif task_filter is TaskFilter.TODAY:
        selected = [t for t in tasks if _due_day(t) == today]
    else:
        selected = list(tasks)

    query = (search or "").strip().lower()
    if query:
        selected = [
            t
            for t in selected
            if query in t.title.lower() or query in (t.description or "").lower()
        ]
    return selected


def _parse_import_payload(payload: str) -> Tuple[List[Task], Optional[Settings]]:
    """インポートデータを解釈する

    タスク配列（export_dataの出力）と、ブラウザ版の
    {"tasks": [...], "settings": {...}} 形式の両方を受け付ける。
    """
    try:
        document = json.loads(payload)
    except ValueError as exc:
        raise ImportFormatError(f"Invalid JSON: {exc}") from exc

    settings: Optional[Settings] = None
    if isinstance(document, dict) and "tasks" in document:
        if document.get("settings") is not None:
            try:
                settings = Settings.model_validate(document["settings"])
            except ValidationError as exc:
                raise ImportFormatError(f"Invalid settings: {exc.error_count()} errors") from exc
        document = document["tasks"]

    try:
        tasks = validate_tasks(document)
    except ValidationError as exc:
        raise ImportFormatError(f"Invalid task list: {exc.error_count()} errors") from exc

    seen = set()
    for task in tasks:
        if task.id in seen:
            raise ImportFormatError(f"Duplicate task id: {task.id}")
        seen.add(task.id)
    return tasks, settings


class TaskService:
    """タスク・設定の操作をトランザクション単位で提供する

    ロックは読み込みを含む全操作で共有する（読み書きの区別なし）。
    トランザクションが想定外の例外で中断した場合、ロックは使用不能状態になり
    以降の呼び出しはLockAcquisitionErrorになる。
    """

    def __init__(self, storage: JsonStorage, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> None:
        self._storage = storage
        self._lock = threading.Lock()
        self._lock_timeout = lock_timeout
        self._poisoned = False

    @contextmanager
    def _transaction(self, action: str) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise LockAcquisitionError(f"Timed out waiting for the store lock ({action})")
        try:
            if self._poisoned:
                raise LockAcquisitionError("Store lock is unusable after an earlier failure")
            try:
                yield
            except StorageIOError as exc:
                raise TaskServiceError(exc) from exc
            except (TodoAppError, ValueError):
                raise
            except Exception:
                self._poisoned = True
                logger.critical("Transaction '%s' aborted, store lock disabled", action)
                raise
        finally:
            self._lock.release()

    # ---- tasks ----

    def list_tasks(self) -> List[Task]:
        with self._transaction("list tasks"):
            return self._storage.load_tasks()

    def get_task(self, task_id: str) -> Optional[Task]:
        with self._transaction("get task"):
            tasks = self._storage.load_tasks()
        return next((t for t in tasks if t.id == task_id), None)

    def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        priority: Optional[Union[Priority, str]] = None,
        due_date: Optional[str] = None,
        attachments: Optional[List[Attachment]] = None,
    ) -> Task:
        task = Task.new(
            title,
            description=description,
            priority=Priority.from_string(priority) if priority is not None else None,
            due_date=due_date,
            attachments=attachments,
        )
        with self._transaction("create task"):
            tasks = self._storage.load_tasks()
            task.touch()
            tasks.append(task)
            self._storage.save_tasks(tasks)
        logger.info("Task created id=%s priority=%s", task.id, task.priority.value)
        return task

    def update_task(self, task_id: str, changes: TaskUpdate) -> Optional[Task]:
        """存在するフィールドだけを反映する。対象がなければNone（何も書き込まない）"""
        with self._transaction("update task"):
            tasks = self._storage.load_tasks()
            task = next((t for t in tasks if t.id == task_id), None)
            if task is None:
                logger.debug("Update skipped, task not found id=%s", task_id)
                return None
            changes.apply_to(task)
            task.touch()
            self._storage.save_tasks(tasks)
        logger.info("Task updated id=%s", task_id)
        return task

    def delete_task(self, task_id: str) -> bool:
        with self._transaction("delete task"):
            tasks = self._storage.load_tasks()
            remaining = [t for t in tasks if t.id != task_id]
            if len(remaining) == len(tasks):
                return False
            self._storage.save_tasks(remaining)
        logger.info("Task deleted id=%s", task_id)
        return True

    @staticmethod
    def stats(tasks: List[Task], today: Optional[date] = None) -> TaskStats:
        return compute_stats(tasks, today)

    def task_stats(self) -> TaskStats:
        return self.stats(self.list_tasks())

    # ---- settings ----

    def get_settings(self) -> Settings:
        with self._transaction("load settings"):
            return self._storage.load_settings()

    def update_settings(self, settings: Settings) -> Settings:
        with self._transaction("save settings"):
            self._storage.save_settings(settings)
        logger.info("Settings saved")
        return settings

    # ---- data management ----

    def export_data(self) -> str:
        with self._transaction("export data"):
            return serialize_tasks(self._storage.load_tasks())

    def import_data(self, payload: str) -> int:
        """タスク一覧を丸ごと置き換える。解釈に失敗した場合は何も書き込まない"""
        tasks, settings = _parse_import_payload(payload)
        with self._transaction("import data"):
            self._storage.save_tasks(tasks)
            if settings is not None:
                self._storage.save_settings(settings)
        logger.info("Imported %d tasks", len(tasks))
        return len(tasks)

    def clear_all_data(self) -> None:
        with self._transaction("clear data"):
            self._storage.save_tasks([])
        logger.info("All tasks cleared")

    def data_dir_path(self) -> str:
        with self._transaction("resolve data dir"):
            return self._storage.data_dir_path()
