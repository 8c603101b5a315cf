import logging
from typing import List

from botocore.exceptions import ClientError

from stackwipe.clients.base import AwsClient
from stackwipe.core.concurrency import CancelToken
from stackwipe.core.errors import ResourceClientError


class BackupClient(AwsClient):
    service_name = 'backup'

    def check_backup_vault_exists(self, vault_name: str) -> bool:
        paginator = self.client.get_paginator('list_backup_vaults')
        try:
            for page in paginator.paginate():
                for vault in page.get('BackupVaultList', []):
                    if vault.get('BackupVaultName') == vault_name:
                        return True
        except ClientError as e:
            raise ResourceClientError(vault_name, e) from e
        return False

    def list_recovery_points(self, vault_name: str) -> List[str]:
        arns = []
        paginator = self.client.get_paginator('list_recovery_points_by_backup_vault')
        try:
            for page in paginator.paginate(BackupVaultName=vault_name):
                arns.extend(rp['RecoveryPointArn'] for rp in page.get('RecoveryPoints', []))
        except ClientError as e:
            raise ResourceClientError(vault_name, e) from e
        return arns

    def delete_recovery_points(self, vault_name: str, recovery_point_arns: List[str], token: CancelToken):
        for arn in recovery_point_arns:
            token.raise_if_cancelled(vault_name)
            logging.info(f"Deleting recovery point {arn} in vault {vault_name}")
            self._call(vault_name, f"Delete recovery point {arn}",
                       lambda: self.client.delete_recovery_point(
                           BackupVaultName=vault_name, RecoveryPointArn=arn))

    def delete_backup_vault(self, vault_name: str):
        self._call(vault_name, f"Delete backup vault {vault_name}",
                   lambda: self.client.delete_backup_vault(BackupVaultName=vault_name))
