CARD_TYPES = ("challenge", "advantage", "disadvantage")

# The Dark Deck. Clients draw from this list; the server only records draws.
FATE_CARDS = [
    {
        "id": "challenge-1",
        "title": "Trial by Shadows",
        "description": "The darkness tests your resolve",
        "type": "challenge",
        "effect": "You must vote for someone different than your original suspicion this round",
    },
    {
        "id": "challenge-2",
        "title": "Whispered Doubts",
        "description": "Paranoia clouds your judgment",
        "type": "challenge",
        "effect": "Your next private message must contain exactly 13 words",
    },
    {
        "id": "challenge-3",
        "title": "Cursed Silence",
        "description": "The spirits demand quiet",
        "type": "challenge",
        "effect": "You cannot send any public messages for the next 5 minutes",
    },
    {
        "id": "advantage-1",
        "title": "Mystic Insight",
        "description": "The crystal ball reveals truth",
        "type": "advantage",
        "effect": "You can see who the last person to vote was (ask Game Master privately)",
    },
    {
        "id": "advantage-2",
        "title": "Shadow Cloak",
        "description": "You blend with the darkness",
        "type": "advantage",
        "effect": "Your vote this round is completely anonymous and untraceable",
    },
    {
        "id": "advantage-3",
        "title": "Divine Protection",
        "description": "The spirits favor you",
        "type": "advantage",
        "effect": "Immunity from elimination if you receive the most votes this round",
    },
    {
        "id": "disadvantage-1",
        "title": "Marked by Fear",
        "description": "Others sense your terror",
        "type": "disadvantage",
        "effect": "Your username appears in red to all other players for this round",
    },
    {
        "id": "disadvantage-2",
        "title": "Cursed Tongue",
        "description": "Your words betray you",
        "type": "disadvantage",
        "effect": 'All your messages this round must end with "...or so the spirits whisper"',
    },
    {
        "id": "disadvantage-3",
        "title": "Phantom Votes",
        "description": "Your influence wanes",
        "type": "disadvantage",
        "effect": "Your vote counts as 0.5 instead of 1 for this round",
    },
]
