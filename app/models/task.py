from sqlalchemy import Column, Integer, String, DateTime
from app.database import Base

STATUS_TODO = "TODO"
STATUS_DONE = "DONE"

DEFAULT_CREATED_BY = "Company Admin"
SYSTEM_UPDATE = "System Update"
SYSTEM_STATUS_UPDATE = "System Status Update"

class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=True)
    due_date = Column(DateTime, nullable=True)
    status = Column(String(50), nullable=False, default=STATUS_TODO)  # TODO, DONE or anything a client sends
    remarks = Column(String(500), nullable=True)
    created_on = Column(DateTime, nullable=False)
    last_updated_on = Column(DateTime, nullable=False)
    created_by = Column(String(255), nullable=False)
    last_updated_by = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Task id={self.id} title={self.title!r} status={self.status!r}>"
