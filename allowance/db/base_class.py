from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
    # table name = lowercased class name ("activitylist", "refreshtoken", ...)
    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()
