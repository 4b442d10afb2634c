"""
設定管理モジュール

関連クラス:
  - todo.storage.JsonStorage: data_dirを使用
  - todo.service.TaskService: lock_timeout_secondsを使用
  - server.run: サーバーのhost/portを使用
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "app_config.yaml"

# Tauri の WebView と開発サーバーのオリジン
DEFAULT_CORS_ORIGINS = ["tauri://localhost", "http://tauri.localhost", "http://localhost:1420"]


@dataclass
class StorageConfig:
    """データ保存設定"""

    data_dir: Optional[str] = None  # 省略時は ~/.todo-app
    lock_timeout_seconds: float = 10.0


@dataclass
class ServerConfig:
    """ローカルAPIサーバー設定（ループバックのみ）"""

    host: str = "127.0.0.1"
    port: int = 8765
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))


@dataclass
class Config:
    """アプリケーション設定クラス"""

    storage: StorageConfig = None  # type: ignore
    server: ServerConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/todo_desk.log"

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.storage is None:
            self.storage = StorageConfig()
        if self.server is None:
            self.server = ServerConfig()

    @property
    def data_dir(self) -> Optional[Path]:
        if not self.storage.data_dir:
            return None
        return Path(self.storage.data_dir).expanduser()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        storage_data = yaml_data.get("storage", {}) or {}
        server_data = yaml_data.get("server", {}) or {}
        log_data = yaml_data.get("log", {}) or {}

        return cls(
            storage=StorageConfig(
                data_dir=storage_data.get("data_dir"),
                lock_timeout_seconds=float(storage_data.get("lock_timeout_seconds", 10.0)),
            ),
            server=ServerConfig(
                host=server_data.get("host", "127.0.0.1"),
                port=int(server_data.get("port", 8765)),
                cors_origins=list(server_data.get("cors_origins") or DEFAULT_CORS_ORIGINS),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/todo_desk.log"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            storage=StorageConfig(
                data_dir=os.getenv("TODO_APP_DATA_DIR") or None,
                lock_timeout_seconds=float(os.getenv("TODO_APP_LOCK_TIMEOUT", "10")),
            ),
            server=ServerConfig(
                host=os.getenv("TODO_APP_HOST", "127.0.0.1"),
                port=int(os.getenv("TODO_APP_PORT", "8765")),
                cors_origins=_split_origins(os.getenv("TODO_APP_CORS_ORIGINS")),
            ),
            log_level=os.getenv("TODO_APP_LOG_LEVEL", "INFO"),
            log_file=os.getenv("TODO_APP_LOG_FILE", "logs/todo_desk.log"),
        )

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """設定ファイルがあればYAML、なければ環境変数から読み込む"""
        path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        if path.exists():
            return cls.from_yaml(path)
        return cls.from_env()


def _split_origins(value: Optional[str]) -> List[str]:
    """カンマ区切りのオリジン一覧を分割（未設定時はデフォルト）"""
    if not value:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in value.split(",") if origin.strip()]
