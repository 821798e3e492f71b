from sqlalchemy import Column, String
from backend.app.core.database import Base, JSONType

class Setting(Base):
    """Singleton documents keyed by name, e.g. 'paymentGateway'."""
    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(JSONType, default=dict)
