"""Message board repository."""

from reimburse.domain.message import Message
from reimburse.repositories.base import BaseRepository


class MessageRepository(BaseRepository[Message]):
    model = Message
