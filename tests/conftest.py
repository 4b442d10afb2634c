"""共通フィクスチャ"""

import pytest

from desktodo.todo import JsonStorage, TaskService


@pytest.fixture
def data_dir(tmp_path):
    """テスト用の一時データディレクトリ"""
    return tmp_path / ".todo-app"


@pytest.fixture
def storage(data_dir):
    return JsonStorage(data_dir)


@pytest.fixture
def service(storage):
    return TaskService(storage, lock_timeout=5.0)
