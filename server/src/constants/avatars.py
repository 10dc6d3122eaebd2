import hashlib
import random

SPOOKY_SYMBOLS = [
    "👻", "💀", "🦇", "🕷️", "🔮", "⚡",
    "🌙", "🗡️", "🏴‍☠️", "🦹", "🎭", "🔥",
]

PROFILE_IMAGES = [f"/assets/profile-images/avatar{i}.png" for i in range(1, 13)]


def random_symbol() -> str:
    return random.choice(SPOOKY_SYMBOLS)


def profile_image_for(username: str) -> str:
    """Same username, same image, in every process."""
    digest = hashlib.sha256(username.encode("utf-8")).digest()
    return PROFILE_IMAGES[int.from_bytes(digest[:4], "big") % len(PROFILE_IMAGES)]
