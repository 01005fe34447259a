#!/usr/bin/env python3
"""Backup Uploader - エントリーポイント"""
import argparse
import sys
from typing import List, Optional

from backup_uploader import BackupUploader, BackupUploaderError, Config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Upload database backups to S3")
    parser.add_argument("--config", help="JSON設定ファイル（省略時は環境変数）")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="バケットへの接続を確認")
    check.add_argument("bucket")

    upload = subparsers.add_parser("upload", help="LOCATION配下のファイルをアップロード")
    upload.add_argument("bucket")
    upload.add_argument("files", nargs="+")
    upload.add_argument("--dry-run", action="store_true")

    subparsers.add_parser("export-credentials", help="認証情報を環境変数へ書き出す")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """メイン関数"""
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_file(args.config) if args.config else Config.from_env()
        if getattr(args, "dry_run", False):
            config.options.dry_run = True

        uploader = BackupUploader(config)
        if args.command == "check":
            uploader.check_access(args.bucket)
        elif args.command == "upload":
            uploader.upload_files(args.files, args.bucket)
        else:
            uploader.export_credentials()

    except (BackupUploaderError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
