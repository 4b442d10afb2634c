#!/usr/bin/env python3
"""
TODO管理CLI - GUIを起動せずにタスクデータを操作するコマンドラインインターフェース

Usage:
    python -m desktodo.todo list [--filter all|pending|completed|overdue|today] [--search TEXT] [--format json|text]
    python -m desktodo.todo add --title "タイトル" [--description "詳細"] [--priority high|medium|low] [--due-date YYYY-MM-DD]
    python -m desktodo.todo update --id ID [--title ...] [--description ...] [--priority ...] [--due-date ...] [--completed|--pending]
    python -m desktodo.todo complete --id ID
    python -m desktodo.todo delete --id ID
    python -m desktodo.todo get --id ID
    python -m desktodo.todo stats
    python -m desktodo.todo export [--output FILE]
    python -m desktodo.todo import --file FILE
    python -m desktodo.todo clear --yes
    python -m desktodo.todo path
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import TodoAppError
from .models import Task, TaskFilter, TaskUpdate
from .service import TaskService, filter_tasks
from .storage import JsonStorage

FORMAT_CHOICES = ["json", "text"]
PRIORITY_CHOICES = ["high", "medium", "low"]


def format_task_text(task: Task) -> str:
    """タスクをテキスト形式で整形"""
    mark = "x" if task.completed else " "
    due = task.due_date or "未設定"
    description = (task.description or "").strip() or "説明なし"
    return f"[{mark}] {task.id} | {task.priority.value} | 期限: {due} | {task.title} | {description}"


def format_task_json(task: Task) -> Dict[str, Any]:
    """タスクを辞書形式に変換（添付ファイルの本体は省略）"""
    data = task.model_dump(mode="json", by_alias=True)
    if task.attachments:
        data["attachments"] = [
            {"id": a.id, "name": a.name, "size": a.size, "type": a.file_type}
            for a in task.attachments
        ]
    return data


def _print_task(task: Task, output_format: str, prefix: str = "") -> None:
    if output_format == "json":
        print(json.dumps(format_task_json(task), ensure_ascii=False))
    else:
        print(f"{prefix}{format_task_text(task)}")


def cmd_list(
    service: TaskService, task_filter: str, search: Optional[str], output_format: str
) -> int:
    """タスク一覧を表示"""
    items = filter_tasks(service.list_tasks(), TaskFilter(task_filter), search)
    if output_format == "json":
        print(json.dumps([format_task_json(item) for item in items], ensure_ascii=False))
    elif not items:
        print("TODOは登録されていません。")
    else:
        for item in items:
            print(format_task_text(item))
    return 0


def cmd_add(
    service: TaskService,
    title: str,
    description: Optional[str],
    priority: Optional[str],
    due_date: Optional[str],
    output_format: str,
) -> int:
    """新しいタスクを追加"""
    if not title.strip():
        print("Error: タイトルは必須です。", file=sys.stderr)
        return 1

    created = service.create_task(
        title=title.strip(),
        description=description.strip() if description else None,
        priority=priority,
        due_date=due_date,
    )
    _print_task(created, output_format, prefix="追加しました: ")
    return 0


def cmd_update(service: TaskService, task_id: str, changes: TaskUpdate, output_format: str) -> int:
    """既存のタスクを部分更新"""
    updated = service.update_task(task_id, changes)
    if not updated:
        print(f"Error: ID {task_id} のTODOが見つかりません。", file=sys.stderr)
        return 1
    _print_task(updated, output_format, prefix="更新しました: ")
    return 0


def cmd_delete(service: TaskService, task_id: str, output_format: str) -> int:
    """タスクを削除"""
    if not service.delete_task(task_id):
        print(f"Error: ID {task_id} のTODOが見つかりません。", file=sys.stderr)
        return 1

    if output_format == "json":
        print(json.dumps({"deleted": True, "id": task_id}, ensure_ascii=False))
    else:
        print(f"削除しました: ID {task_id}")
    return 0


def cmd_get(service: TaskService, task_id: str, output_format: str) -> int:
    """特定のタスクを取得"""
    task = service.get_task(task_id)
    if not task:
        print(f"Error: ID {task_id} のTODOが見つかりません。", file=sys.stderr)
        return 1
    _print_task(task, output_format)
    return 0


def cmd_stats(service: TaskService, output_format: str) -> int:
    """タスク集計を表示"""
    stats = service.task_stats()
    if output_format == "json":
        print(json.dumps(stats.model_dump(), ensure_ascii=False))
    else:
        print(
            f"合計: {stats.total} | 完了: {stats.completed} | 未完了: {stats.pending} | "
            f"期限切れ: {stats.overdue} | 今日: {stats.today}"
        )
        print(
            f"優先度 高: {stats.high_priority} | 中: {stats.medium_priority} | "
            f"低: {stats.low_priority}"
        )
    return 0


def cmd_export(service: TaskService, output: Optional[str]) -> int:
    """タスク一覧をJSONで出力"""
    payload = service.export_data()
    if output:
        try:
            Path(output).write_text(payload, encoding="utf-8")
        except OSError as exc:
            print(f"Error: ファイルに書き込めません: {exc}", file=sys.stderr)
            return 1
        print(f"エクスポートしました: {output}")
    else:
        print(payload)
    return 0


def cmd_import(service: TaskService, file_path: str) -> int:
    """JSONファイルでタスク一覧を置き換える"""
    try:
        payload = Path(file_path).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error: ファイルを読み込めません: {exc}", file=sys.stderr)
        return 1
    count = service.import_data(payload)
    print(f"インポートしました: {count}件")
    return 0


def cmd_clear(service: TaskService, confirmed: bool) -> int:
    """全タスクを削除"""
    if not confirmed:
        print("Error: 全削除には --yes を指定してください。", file=sys.stderr)
        return 1
    service.clear_all_data()
    print("全てのTODOを削除しました。")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="TODO管理CLI - デスクトップTODOアプリのデータを直接操作する",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        help="データディレクトリ（デフォルト: ~/.todo-app）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    def add_format(sub: argparse.ArgumentParser) -> None:
        sub.add_argument(
            "--format",
            choices=FORMAT_CHOICES,
            default="text",
            help="出力フォーマット（デフォルト: text）",
        )

    # list コマンド
    parser_list = subparsers.add_parser("list", help="TODOリストを表示")
    parser_list.add_argument(
        "--filter",
        choices=[f.value for f in TaskFilter],
        default=TaskFilter.ALL.value,
        help="状態フィルタ（デフォルト: all）",
    )
    parser_list.add_argument("--search", help="タイトル・説明の部分一致検索")
    add_format(parser_list)

    # add コマンド
    parser_add = subparsers.add_parser("add", help="新しいTODOを追加")
    parser_add.add_argument("--title", required=True, help="TODOのタイトル")
    parser_add.add_argument("--description", help="TODOの詳細説明")
    parser_add.add_argument("--priority", choices=PRIORITY_CHOICES, help="優先度（デフォルト: medium）")
    parser_add.add_argument("--due-date", help="期限日（YYYY-MM-DD形式）")
    add_format(parser_add)

    # update コマンド
    parser_update = subparsers.add_parser("update", help="既存のTODOを更新")
    parser_update.add_argument("--id", required=True, help="更新するTODOのID")
    parser_update.add_argument("--title", help="新しいタイトル")
    parser_update.add_argument("--description", help="新しい詳細説明")
    parser_update.add_argument("--priority", choices=PRIORITY_CHOICES, help="新しい優先度")
    parser_update.add_argument("--due-date", help="新しい期限日（YYYY-MM-DD形式）")
    state = parser_update.add_mutually_exclusive_group()
    state.add_argument("--completed", dest="completed", action="store_true", default=None, help="完了にする")
    state.add_argument("--pending", dest="completed", action="store_false", help="未完了に戻す")
    parser_update.set_defaults(completed=None)
    add_format(parser_update)

    # complete / delete / get コマンド
    for name, help_text in (
        ("complete", "TODOを完了状態にする"),
        ("delete", "TODOを削除"),
        ("get", "特定のTODOを取得"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--id", required=True, help="対象TODOのID")
        add_format(sub)

    # stats コマンド
    parser_stats = subparsers.add_parser("stats", help="TODOの集計を表示")
    add_format(parser_stats)

    # export / import / clear / path コマンド
    parser_export = subparsers.add_parser("export", help="TODOをJSONでエクスポート")
    parser_export.add_argument("--output", help="出力ファイル（省略時は標準出力）")

    parser_import = subparsers.add_parser("import", help="JSONファイルからTODOを置き換え")
    parser_import.add_argument("--file", required=True, help="インポートするJSONファイル")

    parser_clear = subparsers.add_parser("clear", help="全てのTODOを削除")
    parser_clear.add_argument("--yes", action="store_true", help="確認なしで削除")

    subparsers.add_parser("path", help="データディレクトリのパスを表示")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLIエントリポイント"""
    args = build_parser().parse_args(argv)

    try:
        service = TaskService(JsonStorage(args.data_dir))

        if args.command == "list":
            return cmd_list(service, args.filter, args.search, args.format)
        elif args.command == "add":
            return cmd_add(
                service,
                args.title,
                args.description,
                args.priority,
                args.due_date,
                args.format,
            )
        elif args.command == "update":
            changes = TaskUpdate(
                title=args.title.strip() if args.title else None,
                description=args.description,
                completed=args.completed,
                priority=args.priority,
                due_date=args.due_date,
            )
            return cmd_update(service, args.id, changes, args.format)
        elif args.command == "complete":
            return cmd_update(service, args.id, TaskUpdate(completed=True), args.format)
        elif args.command == "delete":
            return cmd_delete(service, args.id, args.format)
        elif args.command == "get":
            return cmd_get(service, args.id, args.format)
        elif args.command == "stats":
            return cmd_stats(service, args.format)
        elif args.command == "export":
            return cmd_export(service, args.output)
        elif args.command == "import":
            return cmd_import(service, args.file)
        elif args.command == "clear":
            return cmd_clear(service, args.yes)
        elif args.command == "path":
            print(service.data_dir_path())
            return 0
        else:
            print(f"Error: 不明なコマンド: {args.command}", file=sys.stderr)
            return 1
    except TodoAppError as exc:
        print(f"Error: {args.command} に失敗しました: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
