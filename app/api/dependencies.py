"""ButterDish — Request-Scoped Client Dependencies."""

from typing import AsyncIterator

from app.connectors.givebutter.client import GivebutterClient
from app.connectors.stream.client import StreamFeedClient


async def get_givebutter_client() -> AsyncIterator[GivebutterClient]:
    client = GivebutterClient()
    try:
        yield client
    finally:
        await client.close()


async def get_stream_client() -> AsyncIterator[StreamFeedClient]:
    client = StreamFeedClient()
    try:
        yield client
    finally:
        await client.close()
