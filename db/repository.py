"""Subscriber repository: the view-model's only handle on storage.

Pure delegation to SubscriberGateway; swap in any object with the same
methods to run the view-model without a database.
"""
from db.gateway import SubscriberGateway
from live_data import LiveData
from schemas.subscriber import Subscriber


class SubscriberRepository:
    def __init__(self, gateway: SubscriberGateway):
        self._gateway = gateway

    @property
    def subscribers(self) -> LiveData[list[Subscriber]]:
        return self._gateway.subscribers

    async def insert(self, subscriber: Subscriber) -> int:
        return await self._gateway.insert(subscriber)

    async def update(self, subscriber: Subscriber) -> int:
        return await self._gateway.update(subscriber)

    async def delete(self, subscriber: Subscriber) -> int:
        return await self._gateway.delete(subscriber)

    async def delete_all(self) -> int:
        return await self._gateway.delete_all()
