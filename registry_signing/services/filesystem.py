"""信頼済みルート証明書の読み込みに使うファイルシステム抽象。"""

import os
from pathlib import Path
from typing import List


class FileSystem:
    """読み取り専用のファイルシステムインターフェース。"""

    def is_directory(self, path: Path) -> bool:
        """パスがディレクトリとして存在するかを返す。"""
        raise NotImplementedError

    def list_directory(self, path: Path) -> List[str]:
        """ディレクトリ直下のエントリ名を列挙する。"""
        raise NotImplementedError

    def read_bytes(self, path: Path) -> bytes:
        """ファイル全体を読み込む。"""
        raise NotImplementedError


class LocalFileSystem(FileSystem):
    """ローカルディスクを参照する実装。

    列挙順はプラットフォームに依存しないよう名前順に固定する。
    """

    def is_directory(self, path: Path) -> bool:
        return path.is_dir()

    def list_directory(self, path: Path) -> List[str]:
        return sorted(os.listdir(path))

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()
