"""バケットへの接続確認"""
from typing import Union

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import ConnectivityError
from ..models.bucket import BucketAddress
from ..utils.logger import LoggerManager


class ConnectivityChecker:
    """アップロード前にバケット（と仮想サブバケット）の存在を確認

    プレフィックス付きの場合、配下にオブジェクトが1つもなければ
    存在しないものとして扱う。作成直後の空のサブバケットも失敗になる。
    """

    def __init__(self, s3_client):
        self.s3_client = s3_client
        self.logger = LoggerManager.get_logger()

    def check_access(self, bucket_address: Union[str, BucketAddress]) -> None:
        if not isinstance(bucket_address, BucketAddress):
            bucket_address = BucketAddress.parse(bucket_address)
        address = str(bucket_address)

        params = {"Bucket": bucket_address.physical}
        if bucket_address.is_nested:
            self.logger.info(
                f"Name = {bucket_address.physical} , Prefix = {bucket_address.prefix}"
            )
            params["Prefix"] = bucket_address.prefix

        try:
            response = self.s3_client.list_objects_v2(**params)
        except (ClientError, BotoCoreError) as e:
            self.logger.error(f"Unable to connect to s3 bucket {address}: {e}")
            raise ConnectivityError(
                f"Unable to connect to s3 bucket {address}. Here's why: {e}", address
            ) from e

        if bucket_address.is_nested and not response.get("Contents"):
            self.logger.error(f"s3 Bucket {address} does not exist")
            raise ConnectivityError(f"s3 Bucket {address} does not exist", address)

        self.logger.info(f"Connectivity with S3 bucket '{address}' established")
