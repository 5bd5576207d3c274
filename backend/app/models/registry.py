"""
Plain labelled registries: client applications and MTP servers.
"""
from sqlalchemy import Column, String, Integer, DateTime, Text
from ..db import Base


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False)


class MtpServer(Base):
    __tablename__ = "mtp_servers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    url = Column(String(512), nullable=False)
    created_at = Column(DateTime, nullable=False)
