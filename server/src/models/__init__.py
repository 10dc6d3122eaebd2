from models.base import Base
from models.user import User
from models.vote import Vote
from models.message import Message
from models.announcement import Announcement
from models.card_draw import CardDraw
from models.login_session import LoginSession

__all__ = ["Base", "User", "Vote", "Message", "Announcement", "CardDraw", "LoginSession"]
