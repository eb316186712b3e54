from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import redis
from pymongo import MongoClient
from pymongo.database import Database


@dataclass
class MongoConfig:
    uri: str
    database: str
    timeout_ms: int = 5000


@dataclass
class RedisConfig:
    host: str
    port: int
    password: str | None
    primary_db: int
    secondary_db: int


def open_mongo(config: MongoConfig) -> tuple[MongoClient, Database]:
    client: MongoClient = MongoClient(config.uri, serverSelectionTimeoutMS=int(config.timeout_ms))
    return client, client[config.database]


def open_redis(config: RedisConfig, *, db: int) -> redis.Redis:
    return redis.Redis(
        host=config.host,
        port=int(config.port),
        password=config.password or None,
        db=int(db),
        decode_responses=True,
    )


def mongo_config_from_dict(data: dict[str, Any]) -> MongoConfig:
    return MongoConfig(
        uri=str(data["uri"]),
        database=str(data["database"]),
        timeout_ms=int(data.get("timeout_ms", 5000)),
    )


def redis_config_from_dict(data: dict[str, Any]) -> RedisConfig:
    return RedisConfig(
        host=str(data["host"]),
        port=int(data.get("port", 6379)),
        password=data.get("password") or None,
        primary_db=int(data.get("primary_db", 0)),
        secondary_db=int(data.get("secondary_db", 1)),
    )
