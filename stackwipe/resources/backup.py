import logging
import time

from stackwipe.core.concurrency import CancelToken
from stackwipe.core.retry import SLEEP_BACKUP_SETTLE
from stackwipe.models import FailedResource
from stackwipe.resources.base import ResourceOperator


class BackupVaultOperator(ResourceOperator):
    # recovery point deletion is asynchronous; DeleteBackupVault fails until it lands
    settle_seconds = SLEEP_BACKUP_SETTLE

    def delete_resource(self, resource: FailedResource, token: CancelToken):
        vault_name = self.physical_id(resource)
        if not self.client.check_backup_vault_exists(vault_name):
            logging.info(f"Backup vault {vault_name} no longer exists, skipping")
            return

        recovery_points = self.client.list_recovery_points(vault_name)
        if recovery_points:
            self.client.delete_recovery_points(vault_name, recovery_points, token)
            time.sleep(self.settle_seconds)

        logging.info(f"Deleting backup vault {vault_name}")
        self.client.delete_backup_vault(vault_name)
