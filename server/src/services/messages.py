import logging

from core.errors import NotFound, ValidationFailed
from core.sanitization import sanitize_text
from storage import MessageRecord, Storage, UserRecord

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def send(
        self,
        sender: UserRecord,
        content: str,
        is_private: bool = False,
        receiver_id: str | None = None,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> dict:
        content = sanitize_text(content)
        if not content:
            raise ValidationFailed("Message cannot be empty")

        receiver = None
        if is_private:
            if not receiver_id:
                raise ValidationFailed("Private messages require a receiver")
            if receiver_id == sender.id:
                raise ValidationFailed("Cannot send a private message to yourself")
            receiver = await self.storage.get_user(receiver_id)
            if not receiver:
                raise NotFound("Receiver not found")

        message = await self.storage.create_message(
            sender_id=sender.id,
            receiver_id=receiver.id if receiver else None,
            content=content,
            is_private=is_private,
            media_url=media_url,
            media_type=media_type if media_url else None,
        )
        logger.info(
            "%s message from %s", "Private" if is_private else "Public", sender.username
        )
        users = {sender.id: sender}
        if receiver:
            users[receiver.id] = receiver
        return self._present(message, users)

    async def public_feed(self) -> list[dict]:
        users = await self._users()
        return [self._present(m, users) for m in await self.storage.get_public_messages()]

    async def private_thread(self, user: UserRecord, target_id: str) -> list[dict]:
        users = await self._users()
        if target_id not in users:
            raise NotFound("Player not found")
        messages = await self.storage.get_private_thread(user.id, target_id)
        return [self._present(m, users) for m in messages]

    async def received(self, user: UserRecord) -> list[dict]:
        users = await self._users()
        messages = await self.storage.get_private_messages_received(user.id)
        return [self._present(m, users) for m in messages]

    async def received_count(self, user: UserRecord) -> dict:
        count = len(await self.storage.get_private_messages_received(user.id))
        return {"count": count, "hasMessages": count > 0}

    async def inbox(self, user: UserRecord) -> list[dict]:
        """Conversations grouped by sender, most recent first.

        No read state is stored, so ``unreadCount`` is every message ever
        received from that sender.
        """
        users = await self._users()
        conversations: dict[str, dict] = {}
        # Newest first, so the first message seen per sender is its latest
        for message in await self.storage.get_private_messages_received(user.id):
            entry = conversations.get(message.sender_id)
            if entry is None:
                sender = users.get(message.sender_id)
                conversations[message.sender_id] = {
                    "senderId": message.sender_id,
                    "senderUsername": sender.username if sender else None,
                    "senderSymbol": sender.symbol if sender else None,
                    "senderProfileImage": sender.profile_image if sender else None,
                    "lastMessage": message.content,
                    "lastMessageAt": message.created_at,
                    "unreadCount": 1,
                }
            else:
                entry["unreadCount"] += 1
        return list(conversations.values())

    async def all_private(self) -> list[dict]:
        users = await self._users()
        return [
            self._present(m, users) for m in await self.storage.get_all_private_messages()
        ]

    async def _users(self) -> dict[str, UserRecord]:
        return {u.id: u for u in await self.storage.get_all_users()}

    @staticmethod
    def _present(message: MessageRecord, users: dict[str, UserRecord]) -> dict:
        sender = users.get(message.sender_id)
        data = {
            "id": message.id,
            "senderId": message.sender_id,
            "senderUsername": sender.username if sender else None,
            "senderSymbol": sender.symbol if sender else None,
            "senderProfileImage": sender.profile_image if sender else None,
            "content": message.content,
            "isPrivate": message.is_private,
            "mediaUrl": message.media_url,
            "mediaType": message.media_type,
            "createdAt": message.created_at,
        }
        if message.is_private:
            receiver = users.get(message.receiver_id)
            data["receiverId"] = message.receiver_id
            data["receiverUsername"] = receiver.username if receiver else None
        return data
