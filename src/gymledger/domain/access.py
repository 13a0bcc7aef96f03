"""Client entrance logging."""

import logging
from datetime import date, datetime

from gymledger.database.base import Database
from gymledger.domain.entities import AccessDecision, AccessLog, ClientStatus
from gymledger.domain.errors import NotFoundError, client_not_found

logger = logging.getLogger(__name__)


class AccessService:
    """Service that logs client entrance scans."""

    def __init__(self, db: Database):
        self.db = db

    def register_entry(self, client_id: int, now: datetime) -> AccessDecision:
        """Log a scan and decide whether the client may enter.

        Only clients whose stored status is active are let in; every scan is
        logged either way.

        Raises:
            NotFoundError: If the client doesn't exist
        """
        client = self.db.get_client(client_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))

        log_id = self.db.create_access_log(
            client_id=client_id, timestamp=now, admin_id=self.db.current_principal()
        )
        granted = client.status == ClientStatus.ACTIVE
        if not granted:
            logger.warning("Blocked entry for client %s (%s)", client_id, client.status.value)
        return AccessDecision(client=client, granted=granted, log=self.db.get_access_log(log_id))

    def list_entries(self, day: date) -> list[AccessLog]:
        return self.db.list_access_logs(day=day)
