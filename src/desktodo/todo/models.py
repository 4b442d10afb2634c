"""Todo Domain Models

タスク・設定・添付ファイルのデータモデル定義。
JSONドキュメント（tasks.json / settings.json）のキー名はUI側の型定義に合わせる。

Related Classes: JsonStorage (storage.py), TaskService (service.py)
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)


def utc_now() -> str:
    """現在時刻をRFC 3339形式で返す"""
    return datetime.now(timezone.utc).isoformat()


class Priority(str, Enum):
    """タスク優先度。未知の文字列はMEDIUMとして扱う。"""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_string(cls, raw: Any) -> "Priority":
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return cls.MEDIUM
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.MEDIUM


class Theme(str, Enum):
    """UIテーマ。未知の文字列はLIGHTとして扱う。"""

    LIGHT = "light"
    PINK = "pink"

    @classmethod
    def from_string(cls, raw: Any) -> "Theme":
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return cls.LIGHT
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.LIGHT


class TaskFilter(str, Enum):
    """一覧表示用のフィルタ（UIのフィルタタブと同じ区分）"""

    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"
    OVERDUE = "overdue"
    TODAY = "today"


class Attachment(BaseModel):
    """タスクに紐づく添付ファイル（Base64で埋め込み保存）"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    size: int = Field(..., ge=0)
    file_type: str = Field(..., alias="type")
    data: str
    created_at: str


class Task(BaseModel):
    """永続化されるタスク

    created_atは作成後に変更しない。updated_atの更新はtouch()経由でのみ行う。
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: Optional[str] = None
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: Optional[str] = None
    created_at: str
    updated_at: str
    attachments: Optional[List[Attachment]] = None

    @field_validator("priority", mode="before")
    @classmethod
    def _lenient_priority(cls, value: Any) -> Priority:
        return Priority.from_string(value)

    @model_serializer(mode="wrap")
    def _omit_missing_attachments(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        if data.get("attachments") is None:
            data.pop("attachments", None)
        return data

    @classmethod
    def new(
        cls,
        title: str,
        description: Optional[str] = None,
        priority: Optional[Priority] = None,
        due_date: Optional[str] = None,
        attachments: Optional[List[Attachment]] = None,
    ) -> "Task":
        """新しいIDと現在時刻でタスクを生成する

        Args:
            title: タイトル
            description: 詳細説明
            priority: 優先度（省略時はMEDIUM）
            due_date: 期限日（YYYY-MM-DD）
            attachments: 添付ファイル

        Returns:
            作成直後のTask（created_at == updated_at）
        """
        now = utc_now()
        return cls(
            id=str(uuid.uuid4()),
            title=title,
            description=description,
            completed=False,
            priority=priority or Priority.MEDIUM,
            due_date=due_date,
            created_at=now,
            updated_at=now,
            attachments=attachments,
        )

    def touch(self) -> None:
        """updated_atを現在時刻に更新する"""
        self.updated_at = utc_now()


class TaskUpdate(BaseModel):
    """部分更新リクエスト。Noneのフィールドは「変更なし」を意味する。

    明示的なnullと未指定は区別しないため、フィールドを空にクリアすることはできない。
    """

    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None
    attachments: Optional[List[Attachment]] = None

    def apply_to(self, task: Task) -> None:
        if self.title is not None:
            task.title = self.title
        if self.description is not None:
            task.description = self.description
        if self.completed is not None:
            task.completed = self.completed
        if self.priority is not None:
            task.priority = Priority.from_string(self.priority)
        if self.due_date is not None:
            task.due_date = self.due_date
        if self.attachments is not None:
            task.attachments = list(self.attachments)


class Settings(BaseModel):
    """アプリ設定（インストールごとに1つ）

    欠けているキーはデフォルト値で補完する。UIが追加で保存する未知のキー
    （collapseModeなど）はそのまま保持する。
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    theme: Theme = Theme.LIGHT
    notifications: bool = True
    auto_save: bool = Field(default=True, alias="autoSave")
    is_pinned: bool = Field(default=False, alias="isPinned")
    is_collapsed: bool = Field(default=False, alias="isCollapsed")
    username: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator("theme", mode="before")
    @classmethod
    def _lenient_theme(cls, value: Any) -> Theme:
        return Theme.from_string(value)

    @model_serializer(mode="wrap")
    def _omit_missing_profile(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        for key in ("username", "avatar"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class TaskStats(BaseModel):
    """タスク集計（永続化しない）"""

    total: int = 0
    completed: int = 0
    pending: int = 0
    high_priority: int = 0
    medium_priority: int = 0
    low_priority: int = 0
    overdue: int = 0
    today: int = 0
