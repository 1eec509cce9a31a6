from typing import List, Optional
from magento_migration.models.logs import LogEntry

class LoggingService:
    """Collects run log entries and flushes them to the logging table."""

    def __init__(self, logger: 'CustomLogger', db: Optional['Database'] = None): # type: ignore
        self.logger = logger
        self.db = db
        self._entries: List[LogEntry] = []

    def add_log_entry(self, entry: LogEntry) -> None:
        self._entries.append(entry)
        self.logger.warning(
            f"[{entry.code}] {entry.description}",
            extra={'run_id': entry.run_id}
        )

    @property
    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    async def save_logs(self) -> int:
        """Write collected entries in one batch and clear them. Returns the count written."""
        if not self._entries:
            return 0
        if self.db is None:
            self.logger.debug("No database configured, log entries kept in memory")
            return 0

        query = """
            INSERT INTO swag_migration_logging (run_id, level, code, title, parameters)
            VALUES ($1, $2, $3, $4, $5)
        """
        rows = [
            (entry.run_id, entry.level, entry.code, entry.title, entry.get_parameters())
            for entry in self._entries
        ]
        await self.db.execute_many(query, rows)

        count = len(rows)
        self._entries.clear()
        self.logger.info(f"Saved {count} log entries")
        return count
