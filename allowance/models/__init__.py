from datetime import datetime, timezone
def utcnow():
    return datetime.now(timezone.utc)
from .user import User
from .auth import RefreshToken
from .member import Member
from .activity import Activity
from .activity_list import ActivityList, ListStatus
