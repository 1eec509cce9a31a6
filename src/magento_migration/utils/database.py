import os
import json
from typing import Optional, Any, Dict, List
import asyncpg # type: ignore
from contextlib import asynccontextmanager
from magento_migration.utils.exceptions import DatabaseError

MIGRATIONS_PATH = os.path.join(os.path.dirname(__file__), '..', 'migrations')

class Database:
    def __init__(self, config: 'Config', logger: 'CustomLogger'): # type: ignore
        self.config = config
        self.logger = logger
        self.pool: Optional[asyncpg.Pool] = None

    async def create_tables(self):
        """Create tables from all SQL files in migrations folder"""
        try:
            sql_files = sorted(
                file for file in os.listdir(MIGRATIONS_PATH) if file.endswith('.sql')
            )

            async with self.transaction() as conn:
                for sql_file in sql_files:
                    with open(os.path.join(MIGRATIONS_PATH, sql_file), 'r') as f:
                        sql = f.read()
                    await conn.execute(sql)
                    self.logger.info(f"Executed migration file: {sql_file}")

            self.logger.info("All database migrations completed successfully")
        except Exception as e:
            self.logger.error(f"Failed to execute migrations: {str(e)}")
            raise

    async def initialize(self):
        """Create the connection pool and apply migrations"""
        async def init(conn):
            await conn.set_type_codec(
                'jsonb',
                encoder=json.dumps,
                decoder=json.loads,
                schema='pg_catalog'
            )
            await conn.set_type_codec(
                'json',
                encoder=json.dumps,
                decoder=json.loads,
                schema='pg_catalog'
            )

        try:
            self.pool = await asyncpg.create_pool(
                user=self.config.POSTGRES_USER,
                password=self.config.POSTGRES_PASSWORD,
                database=self.config.POSTGRES_DB,
                host=self.config.POSTGRES_HOST,
                port=self.config.POSTGRES_PORT,
                min_size=self.config.POOL_MIN_SIZE,
                max_size=self.config.POOL_MAX_SIZE,
                init=init
            )
            await self.create_tables()
            self.logger.info("Database initialization completed successfully")

        except Exception as e:
            self.logger.error(f"Failed to initialize database: {str(e)}")
            raise

    async def close(self):
        """Close database connection pool"""
        if self.pool:
            await self.pool.close()
            self.pool = None
            self.logger.info("Database connection pool closed")

    def _require_pool(self) -> 'asyncpg.Pool':
        if not self.pool:
            raise DatabaseError("Database pool not initialized")
        return self.pool

    @asynccontextmanager
    async def transaction(self):
        """Context manager for database transactions"""
        async with self._require_pool().acquire() as connection:
            async with connection.transaction():
                yield connection

    async def fetchrow(self, query: str, *args) -> Optional[Dict[str, Any]]:
        """Fetch single row from database"""
        async with self._require_pool().acquire() as conn:
            result = await conn.fetchrow(query, *args)
            return dict(result) if result else None

    async def fetch(self, query: str, *args) -> List[Dict[str, Any]]:
        """Fetch multiple rows from database"""
        async with self._require_pool().acquire() as conn:
            results = await conn.fetch(query, *args)
            return [dict(row) for row in results]

    async def execute(self, query: str, *args) -> str:
        """Execute database query"""
        async with self._require_pool().acquire() as conn:
            return await conn.execute(query, *args)

    async def execute_many(self, query: str, args_list: List[tuple]) -> None:
        """Execute same query with multiple sets of arguments"""
        async with self._require_pool().acquire() as conn:
            async with conn.transaction():
                await conn.executemany(query, args_list)

    async def health_check(self) -> bool:
        """Check database connection health"""
        try:
            async with self._require_pool().acquire() as conn:
                await conn.execute('SELECT 1')
            return True
        except Exception as e:
            self.logger.error(f"Database health check failed: {str(e)}")
            return False
