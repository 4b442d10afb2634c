"""ドメインモデルのテスト"""

import json

from desktodo.todo import Attachment, Priority, Settings, Task, TaskUpdate, Theme


def test_priority_from_string_known_and_unknown():
    """既知の値はそのまま、未知の値はMEDIUMになる"""
    assert Priority.from_string("high") is Priority.HIGH
    assert Priority.from_string("Low") is Priority.LOW
    assert Priority.from_string("urgent") is Priority.MEDIUM
    assert Priority.from_string(None) is Priority.MEDIUM
    assert Priority.from_string(Priority.LOW) is Priority.LOW


def test_theme_from_string_falls_back_to_light():
    assert Theme.from_string("pink") is Theme.PINK
    assert Theme.from_string("dark") is Theme.LIGHT
    assert Theme.from_string("") is Theme.LIGHT


def test_task_new_defaults():
    """新規タスクはUUID・同一タイムスタンプ・MEDIUM優先度"""
    task = Task.new("Buy milk")

    assert len(task.id) == 36
    assert task.created_at == task.updated_at
    assert task.priority is Priority.MEDIUM
    assert task.completed is False
    assert task.description is None


def test_task_touch_keeps_created_at():
    task = Task.new("Write report")
    created_at = task.created_at

    task.touch()

    assert task.created_at == created_at
    assert task.updated_at >= created_at


def test_task_serialization_omits_missing_attachments():
    task = Task.new("No files", priority=Priority.HIGH)
    data = json.loads(task.model_dump_json(by_alias=True))

    assert "attachments" not in data
    assert data["priority"] == "high"
    assert data["description"] is None


def test_attachment_uses_type_key():
    attachment = Attachment.model_validate(
        {
            "id": "a1",
            "name": "memo.txt",
            "size": 4,
            "type": "text/plain",
            "data": "dGVzdA==",
            "created_at": "2025-01-01T00:00:00+00:00",
        }
    )
    task = Task.new("With file", attachments=[attachment])
    data = task.model_dump(mode="json", by_alias=True)

    assert attachment.file_type == "text/plain"
    assert data["attachments"][0]["type"] == "text/plain"


def test_task_accepts_capitalized_priority():
    """旧形式（High/Medium/Low）のファイルも読み込める"""
    task = Task.model_validate(
        {
            "id": "t1",
            "title": "legacy",
            "completed": False,
            "priority": "High",
            "created_at": "2025-01-01T00:00:00+00:00",
            "updated_at": "2025-01-01T00:00:00+00:00",
        }
    )
    assert task.priority is Priority.HIGH


def test_task_update_applies_only_present_fields():
    task = Task.new("Original", description="keep me", priority=Priority.LOW)

    TaskUpdate(completed=True, priority="bogus").apply_to(task)

    assert task.completed is True
    assert task.title == "Original"
    assert task.description == "keep me"
    assert task.priority is Priority.MEDIUM


def test_settings_defaults_and_aliases():
    settings = Settings()
    data = settings.model_dump(mode="json", by_alias=True)

    assert data == {
        "theme": "light",
        "notifications": True,
        "autoSave": True,
        "isPinned": False,
        "isCollapsed": False,
    }


def test_settings_backfills_missing_keys_and_keeps_unknown():
    settings = Settings.model_validate({"theme": "pink", "isPinned": True, "collapseMode": "bar"})
    data = settings.model_dump(mode="json", by_alias=True)

    assert settings.theme is Theme.PINK
    assert settings.is_pinned is True
    assert settings.auto_save is True
    assert settings.notifications is True
    assert data["collapseMode"] == "bar"
