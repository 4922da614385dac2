# Import every model so Base.metadata knows all tables before create_all()
from ..models.user import User
from ..models.auth import RefreshToken
from ..models.member import Member
from ..models.activity import Activity
from ..models.activity_list import ActivityList, ListStatus
from ..db.base_class import Base
