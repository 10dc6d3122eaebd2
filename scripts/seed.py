"""Seed script to populate the database with sample players for testing."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "server" / "src"))

from services.announcements import AnnouncementService  # noqa: E402
from services.auth import AuthService  # noqa: E402
from services.messages import MessageService  # noqa: E402
from services.votes import VoteService  # noqa: E402
from storage import create_storage  # noqa: E402

PLAYERS = ["Alice", "Bob", "Charlie", "Dana", "Eve"]
DEFAULT_CODEWORD = "pass1234"


async def seed():
    storage = create_storage()
    await storage.startup()
    try:
        auth = AuthService(storage)

        players = []
        for name in PLAYERS:
            existing = await storage.get_user_by_username(name)
            players.append(existing or await auth.register(name, DEFAULT_CODEWORD))

        game_master = await storage.get_user_by_username("Narrator")
        if not game_master:
            game_master = await auth.register("Narrator", DEFAULT_CODEWORD, is_game_master=True)

        # Everyone suspects the next player around the table
        votes = VoteService(storage)
        for i, player in enumerate(players):
            await votes.cast(player, players[(i + 1) % len(players)].id)

        messages = MessageService(storage)
        await messages.send(players[0], "Something feels off about tonight...")
        await messages.send(
            players[1], "I saw you near the castle.", is_private=True, receiver_id=players[2].id
        )

        await AnnouncementService(storage).create(
            game_master,
            title="The game begins",
            content="The Traitors walk among you. Trust no one.",
        )

        print("Database seeded with sample data!")
        print(f"  {len(players)} players (codeword: {DEFAULT_CODEWORD})")
        print("  1 game master: Narrator")
        print(f"  {len(players)} votes")
    finally:
        await storage.close()


if __name__ == "__main__":
    asyncio.run(seed())
