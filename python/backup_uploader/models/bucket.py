"""バケットアドレスとアップロード先の解決"""
from dataclasses import dataclass
from typing import Optional, Union

SEPARATOR = "/"


@dataclass(frozen=True)
class UploadTarget:
    """1ファイル分のアップロード先"""
    bucket: str
    key: str


@dataclass(frozen=True)
class BucketAddress:
    """`name` または `name/prefix/...` 形式のバケット指定

    最初の "/" より前が物理バケット、後ろが仮想サブバケットのプレフィックス。
    """
    physical: str
    prefix: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> 'BucketAddress':
        if not text:
            raise ValueError("Bucket address cannot be empty")
        physical, sep, prefix = text.partition(SEPARATOR)
        if not sep:
            return cls(physical=physical)
        return cls(physical=physical, prefix=prefix)

    @property
    def is_nested(self) -> bool:
        return self.prefix is not None

    def object_key(self, file_name: str) -> str:
        # demo/test/test2 + demo.backup -> test/test2/demo.backup
        if self.prefix is None:
            return file_name
        return f"{self.prefix}{SEPARATOR}{file_name}"

    def target(self, file_name: str) -> UploadTarget:
        return UploadTarget(bucket=self.physical, key=self.object_key(file_name))

    def __str__(self) -> str:
        if self.prefix is None:
            return self.physical
        return f"{self.physical}{SEPARATOR}{self.prefix}"


def resolve(bucket_address: Union[str, BucketAddress], file_name: str) -> UploadTarget:
    """バケット指定とファイル名から物理バケットとオブジェクトキーを求める"""
    if not isinstance(bucket_address, BucketAddress):
        bucket_address = BucketAddress.parse(bucket_address)
    return bucket_address.target(file_name)
