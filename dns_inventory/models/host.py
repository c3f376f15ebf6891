from sqlalchemy import Column, Integer, Text, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from .base import Base

class Host(Base):
    """
    Represents a host derived from A/AAAA zone records.

    Rows are rebuilt on every zone import; ``disabled`` is carried across
    imports and hides the host from every inventory view (soft delete).
    """
    __tablename__ = 'hosts'
    name = Column(Text, primary_key=True)
    ipv4 = Column(Text, nullable=True)
    ipv6 = Column(Text, nullable=True)
    disabled = Column(Integer, nullable=False, default=0, server_default=text('0'))
    cnames = relationship("CName", back_populates="host", cascade="all, delete-orphan", passive_deletes=True)
    variables = relationship("HostVar", back_populates="host", cascade="all, delete-orphan", passive_deletes=True)
    groups = relationship("Group", secondary="host_groups", back_populates="hosts", passive_deletes=True)

    @property
    def is_disabled(self):
        return bool(self.disabled)

class CName(Base):
    """
    Represents a CNAME alias pointing at a host.
    """
    __tablename__ = 'cnames'
    __table_args__ = (
        Index('idx_cnames_canonical', 'canonical'),
    )
    alias = Column(Text, primary_key=True)
    canonical = Column(Text, ForeignKey('hosts.name', ondelete='CASCADE'), nullable=False)
    host = relationship("Host", back_populates="cnames")

class HostVar(Base):
    """
    Free-form key/value variable attached to a host.
    """
    __tablename__ = 'host_vars'
    host_name = Column('host', Text, ForeignKey('hosts.name', ondelete='CASCADE'), primary_key=True)
    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)
    host = relationship("Host", back_populates="variables")
