"""TODO CLI の動作テスト"""

import json
import os
import subprocess
import sys
from pathlib import Path

from desktodo.todo.cli import main

ROOT_DIR = Path(__file__).parent.parent


def run_cli(args: list[str], data_dir: Path, capsys) -> tuple[int, str, str]:
    """CLI実行ヘルパー（プロセス内）"""
    code = main(["--data-dir", str(data_dir)] + args)
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def add_task(data_dir: Path, capsys, *extra: str) -> dict:
    code, out, _ = run_cli(["add", *extra, "--format", "json"], data_dir, capsys)
    assert code == 0
    return json.loads(out)


def test_cli_list_empty(tmp_path, capsys):
    """空のリスト取得"""
    code, out, _ = run_cli(["list", "--format", "json"], tmp_path, capsys)
    assert code == 0
    assert json.loads(out) == []


def test_cli_add_and_list(tmp_path, capsys):
    """TODO追加とリスト取得"""
    added = add_task(
        tmp_path,
        capsys,
        "--title",
        "会議準備",
        "--description",
        "資料作成とリハーサル",
        "--due-date",
        "2025-12-15",
        "--priority",
        "high",
    )
    assert added["title"] == "会議準備"
    assert added["priority"] == "high"
    assert added["due_date"] == "2025-12-15"

    code, out, _ = run_cli(["list", "--format", "json"], tmp_path, capsys)
    assert code == 0
    items = json.loads(out)
    assert [item["id"] for item in items] == [added["id"]]


def test_cli_update(tmp_path, capsys):
    """TODO更新（指定したフィールドのみ変更）"""
    todo_id = add_task(tmp_path, capsys, "--title", "買い物", "--priority", "low")["id"]

    code, out, _ = run_cli(
        [
            "update",
            "--id",
            todo_id,
            "--title",
            "買い物（牛乳とパン）",
            "--description",
            "スーパーで購入",
            "--completed",
            "--format",
            "json",
        ],
        tmp_path,
        capsys,
    )
    assert code == 0
    updated = json.loads(out)
    assert updated["title"] == "買い物（牛乳とパン）"
    assert updated["description"] == "スーパーで購入"
    assert updated["completed"] is True
    assert updated["priority"] == "low"


def test_cli_complete_and_filter(tmp_path, capsys):
    """TODO完了とフィルタ"""
    todo_id = add_task(tmp_path, capsys, "--title", "タスクA")["id"]
    add_task(tmp_path, capsys, "--title", "タスクB")

    code, out, _ = run_cli(["complete", "--id", todo_id, "--format", "json"], tmp_path, capsys)
    assert code == 0
    assert json.loads(out)["completed"] is True

    code, out, _ = run_cli(["list", "--filter", "pending", "--format", "json"], tmp_path, capsys)
    assert [item["title"] for item in json.loads(out)] == ["タスクB"]


def test_cli_delete(tmp_path, capsys):
    """TODO削除"""
    todo_id = add_task(tmp_path, capsys, "--title", "タスクB")["id"]

    code, out, _ = run_cli(["delete", "--id", todo_id, "--format", "json"], tmp_path, capsys)
    assert code == 0
    assert json.loads(out) == {"deleted": True, "id": todo_id}

    code, _, err = run_cli(["delete", "--id", todo_id], tmp_path, capsys)
    assert code == 1
    assert "見つかりません" in err


def test_cli_get_invalid_id(tmp_path, capsys):
    """存在しないID指定でエラー"""
    code, _, err = run_cli(["get", "--id", "999", "--format", "json"], tmp_path, capsys)
    assert code == 1
    assert "見つかりません" in err


def test_cli_stats(tmp_path, capsys):
    add_task(tmp_path, capsys, "--title", "高", "--priority", "high")
    add_task(tmp_path, capsys, "--title", "低", "--priority", "low")

    code, out, _ = run_cli(["stats", "--format", "json"], tmp_path, capsys)
    assert code == 0
    stats = json.loads(out)
    assert stats["total"] == 2
    assert stats["pending"] == 2
    assert stats["high_priority"] == 1
    assert stats["low_priority"] == 1


def test_cli_export_import_clear(tmp_path, capsys):
    data_dir = tmp_path / "data"
    add_task(data_dir, capsys, "--title", "バックアップ対象")
    backup = tmp_path / "backup.json"

    code, _, _ = run_cli(["export", "--output", str(backup)], data_dir, capsys)
    assert code == 0

    code, _, err = run_cli(["clear"], data_dir, capsys)
    assert code == 1
    assert "--yes" in err

    code, _, _ = run_cli(["clear", "--yes"], data_dir, capsys)
    assert code == 0
    code, out, _ = run_cli(["list", "--format", "json"], data_dir, capsys)
    assert json.loads(out) == []

    code, out, _ = run_cli(["import", "--file", str(backup)], data_dir, capsys)
    assert code == 0
    assert "1件" in out


def test_cli_import_invalid_file(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")

    code, _, err = run_cli(["import", "--file", str(bad)], tmp_path / "data", capsys)
    assert code == 1
    assert "Invalid JSON" in err


def test_cli_text_format(tmp_path, capsys):
    """テキスト形式出力"""
    add_task(tmp_path, capsys, "--title", "テキストテスト", "--description", "説明文")

    code, out, _ = run_cli(["list"], tmp_path, capsys)
    assert code == 0
    assert "テキストテスト" in out
    assert "説明文" in out


def test_cli_module_entry_point(tmp_path):
    """python -m desktodo.todo で起動できる"""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in [str(ROOT_DIR / "src"), env.get("PYTHONPATH", "")] if p
    )
    result = subprocess.run(
        [sys.executable, "-m", "desktodo.todo", "--data-dir", str(tmp_path), "path"],
        capture_output=True,
        text=True,
        env=env,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == str(tmp_path.resolve())


def test_cli_export_unwritable_output(tmp_path, capsys):
    """書き込めない出力先でエラー終了"""
    add_task(tmp_path, capsys, "--title", "エクスポート対象")
    output = tmp_path / "missing_dir" / "backup.json"

    code, _, err = run_cli(["export", "--output", str(output)], tmp_path, capsys)
    assert code == 1
    assert "Error:" in err
    assert not output.exists()
