"""ファイル操作関連のユーティリティ"""
import os
from dataclasses import dataclass

from ..exceptions import FileIOError


@dataclass(frozen=True)
class FileInfo:
    """ファイル情報"""
    path: str
    size: int
    relative_path: str

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


class FileScanner:
    """バックアップディレクトリ内のファイル参照"""

    def __init__(self, location: str):
        self.location = location

    def build_path(self, file_name: str) -> str:
        # 絶対パスのファイル名でもLOCATION配下として扱う
        return f"{self.location}/{file_name}"

    def get_file_info(self, file_name: str) -> FileInfo:
        """単一ファイルの情報を取得"""
        file_path = self.build_path(file_name)
        try:
            size = os.path.getsize(file_path)
        except OSError as e:
            raise FileIOError(
                f"Couldn't stat file {file_path}. Here's why: {e}", file_path
            ) from e

        return FileInfo(path=file_path, size=size, relative_path=file_name)
